import os

import pytest

from cgview.config import CgviewConfig


@pytest.fixture(autouse=True)
def fresh_config():
    CgviewConfig.forget()
    yield
    CgviewConfig.forget()


class FakeSystem(object):
    '''A procfs and a cgroupfs laid out under a temporary directory.'''

    def __init__(self, root):
        self.procfs = root / 'proc'
        self.cgroupfs = root / 'cgroup'
        self.procfs.mkdir()
        self.cgroupfs.mkdir()

    def set_cgroup_file(self, pid, data):
        d = self.procfs / str(pid)
        d.mkdir(exist_ok=True)
        (d / 'cgroup').write_bytes(data)

    def make_cgroup(self, controller, path, files=None):
        d = self.cgroupfs / controller / path.lstrip('/')
        d.mkdir(parents=True, exist_ok=True)
        for name, contents in (files or {}).items():
            (d / name).write_text(contents)
        return d

    @property
    def basepath(self):
        return os.fsencode(self.cgroupfs)


@pytest.fixture
def fake_sys(tmp_path):
    return FakeSystem(tmp_path)
