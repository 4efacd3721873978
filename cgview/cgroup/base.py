# Copyright (c) 2016-2017, Parallels International GmbH
# Copyright (c) 2017-2026, Virtuozzo International GmbH, All rights reserved
#
# This file is part of OpenVZ. OpenVZ is free software; you can redistribute
# it and/or modify it under the terms of the GNU General Public License as
# published by the Free Software Foundation; either version 2 of the License,
# or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA
# 02110-1301, USA.
#
# Our contact details: Virtuozzo International GmbH, Vordergasse 59, 8200
# Schaffhausen, Switzerland.

import logging
import os
import os.path

from cgview.cgroup.controller import Controller
from cgview.config import CgviewConfig
from cgview.error import ProcfsUnreadableError

logger = logging.getLogger(__name__)


def _to_bytes(name):
    return os.fsencode(name)


def parse_cgroup_file(data):
    '''Parse the contents of /proc/<pid>/cgroup.

    Each line looks like "<hierarchy id>:<subsys>[,<subsys>...]:<path>".
    Returns a dictionary mapping subsystem name to the path of the cgroup
    within that subsystem's hierarchy, both as bytes. Lines with less than
    three columns are skipped. If a subsystem is listed more than once, the
    last line wins.
    '''
    cgroup = {}
    for l in data.split(b'\n'):
        if not l:
            continue
        columns = l.split(b':', 2)
        if len(columns) < 3:
            logger.debug('Skipping malformed cgroup line %r', l)
            continue
        _, subsys, path = columns
        for s in subsys.split(b','):
            if s:
                cgroup[s] = path
    return cgroup


def format_cgroup_file(cgroup):
    '''Inverse of parse_cgroup_file.

    Every subsystem gets a line of its own, hierarchy ids are made up.
    '''
    lines = [b'%d:%s:%s\n' % (i, subsys, cgroup[subsys])
             for i, subsys in enumerate(sorted(cgroup), 1)]
    return b''.join(lines)


def pid_cgroup(pid, procfs=b'/proc'):
    '''Get the cgroup which 'pid' is attached to.

    Returns a dictionary mapping cgroup subsystem name to the path of the
    cgroup which 'pid' is attached to. Raises ProcfsUnreadableError if the
    procfs file cannot be read.
    '''
    procfs = _to_bytes(procfs)
    path = os.path.join(procfs, b'%d' % pid, b'cgroup')
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as err:
        raise ProcfsUnreadableError(pid, path, err,
                                    live=(procfs == b'/proc')) from err
    return parse_cgroup_file(data)


class CGroup(object):
    '''Placement of a process in the cgroup v1 hierarchies.

    The placement is read once, at construction, and never refreshed.
    Controller views are made with controller().
    '''

    def __init__(self, basepath, pid, procfs=b'/proc'):
        self._basepath = _to_bytes(basepath)
        self._pid = pid
        self._controllers = pid_cgroup(pid, procfs)
        logger.debug('Process %d cgroups: %r', pid, self._controllers)

    @classmethod
    def new(cls):
        '''Get the CGroup of the current process.'''
        cfg = CgviewConfig()
        return cls(cfg.cgroup_root(), os.getpid(), cfg.procfs_root())

    @classmethod
    def from_base_and_pid(cls, basepath, pid):
        return cls(basepath, pid, CgviewConfig().procfs_root())

    @classmethod
    def for_process(cls, process, basepath=None):
        '''Get the CGroup of a psutil.Process.'''
        cfg = CgviewConfig()
        if basepath is None:
            basepath = cfg.cgroup_root()
        return cls(basepath, process.pid, cfg.procfs_root())

    @property
    def basepath(self):
        return self._basepath

    @property
    def pid(self):
        return self._pid

    @property
    def placement(self):
        return dict(self._controllers)

    def controllers(self):
        return sorted(self._controllers)

    def __contains__(self, name):
        return _to_bytes(name) in self._controllers

    def __repr__(self):
        return '%s(%r, %d)' % (type(self).__name__, self._basepath, self._pid)

    def controller_path(self, name):
        '''Return the directory of controller 'name', or None if the process
        is not in that controller's hierarchy.

        'name' is a single path component; ValueError is raised if it
        contains a slash.
        '''
        name = _to_bytes(name)
        if b'/' in name:
            raise ValueError('Bad controller name: %r' % (name,))
        try:
            path = self._controllers[name]
        except KeyError:
            return None
        # the hierarchy root is basepath/name, so make the path relative
        if path.startswith(b'/'):
            path = path[1:]
        return os.path.join(self._basepath, name, path)

    def controller(self, name):
        '''Get a controller view of this cgroup.

        Returns None if the named controller is not present or its directory
        cannot be listed.
        '''
        path = self.controller_path(name)
        if path is None:
            return None
        try:
            return Controller(path)
        except OSError as err:
            logger.debug('Cannot list cgroup directory %r: %s', path, err)
            return None
