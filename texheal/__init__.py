"""texheal — self-healing TeX build driver."""

__version__ = "0.1.0"
