"""
Tests for the privilege probe (mocked ``id -u``).
"""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from texheal.core.services.privilege import PrivilegeProbeError, current_uid, is_elevated

_WHICH = "texheal.core.services.privilege.shutil.which"
_RUN = "texheal.core.services.privilege.subprocess.run"


def _id_result(stdout: str = "", stderr: str = "", rc: int = 0):
    return subprocess.CompletedProcess(args=["id", "-u"], returncode=rc, stdout=stdout, stderr=stderr)


class TestCurrentUid:
    def test_root(self):
        with patch(_WHICH, return_value="/usr/bin/id"), \
             patch(_RUN, return_value=_id_result("0\n")) as run:
            assert current_uid() == 0
            assert is_elevated()
        run.assert_called_with(["id", "-u"], capture_output=True, text=True, timeout=10)

    def test_regular_user(self):
        with patch(_WHICH, return_value="/usr/bin/id"), \
             patch(_RUN, return_value=_id_result("501\n")):
            assert current_uid() == 501
            assert not is_elevated()

    def test_id_missing(self):
        with patch(_WHICH, return_value=None):
            with pytest.raises(PrivilegeProbeError, match="not available"):
                current_uid()

    def test_unparseable_output(self):
        with patch(_WHICH, return_value="/usr/bin/id"), \
             patch(_RUN, return_value=_id_result("uid=0(root)\n")):
            with pytest.raises(PrivilegeProbeError, match="not a user id"):
                current_uid()

    def test_empty_output(self):
        with patch(_WHICH, return_value="/usr/bin/id"), \
             patch(_RUN, return_value=_id_result("")):
            with pytest.raises(PrivilegeProbeError):
                is_elevated()

    def test_id_fails(self):
        with patch(_WHICH, return_value="/usr/bin/id"), \
             patch(_RUN, return_value=_id_result(stderr="id: error", rc=1)):
            with pytest.raises(PrivilegeProbeError, match="exit 1"):
                current_uid()

    def test_id_cannot_run(self):
        with patch(_WHICH, return_value="/usr/bin/id"), \
             patch(_RUN, side_effect=OSError("exec format error")):
            with pytest.raises(PrivilegeProbeError, match="could not be run"):
                current_uid()
