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
import threading

import psutil

from cgview.error import AttributeUnreadableError
from cgview.util.misc import parse_kv, parse_range_list

logger = logging.getLogger(__name__)


class Controller(object):
    '''Read-only view of one controller directory of a cgroup.

    The directory is listed once, at construction, to learn the attribute
    files it holds; OSError is raised if it cannot be listed. Attribute
    contents are read anew on every call.
    '''

    def __init__(self, path):
        self.path = os.fsencode(path)
        self._lock = threading.Lock()
        self._cache = {}
        with os.scandir(self.path) as it:
            for entry in it:
                if entry.is_file():
                    self._cache[entry.name] = entry.path

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.path)

    def attributes(self):
        with self._lock:
            return sorted(self._cache)

    def _file_path(self, key):
        key = os.fsencode(key)
        if b'/' in key:
            raise ValueError('Bad attribute name: %r' % (key,))
        with self._lock:
            try:
                return self._cache[key]
            except KeyError:
                # may have appeared after the directory was listed
                path = os.path.join(self.path, key)
                self._cache[key] = path
                return path

    def get(self, key):
        '''Get the value of attribute 'key'.

        Returns the contents of the attribute file as a string, or None if
        there is no such attribute. Raises AttributeUnreadableError if the
        attribute exists, but reading it failed or its contents are not
        valid UTF-8. 'key' must be a plain file name, ValueError is raised
        if it contains a slash; nested cgroups need a view of their own.
        '''
        path = self._file_path(key)
        if not os.path.isfile(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as err:
            logger.debug('Failed to read %r: %s', path, err)
            raise AttributeUnreadableError(path, err) from err

    def get_int(self, key):
        val = self.get(key)
        if val is None:
            return None
        return int(val)

    def get_kv(self, key):
        val = self.get(key)
        if val is None:
            return None
        return parse_kv(val)

    def get_list(self, key):
        val = self.get(key)
        if val is None:
            return None
        return [l.strip() for l in val.splitlines() if l.strip()]

    def get_range_list(self, key):
        val = self.get(key)
        if val is None:
            return None
        return parse_range_list(val.strip())

    def pids(self):
        '''Get the pids of the processes in this cgroup.

        cgroup.procs is preferred; older kernels only have tasks, which
        lists threads. Returns None if neither is present.
        '''
        for key in (b'cgroup.procs', b'tasks'):
            pids = self.get_list(key)
            if pids is not None:
                return [int(p) for p in pids]
        return None

    def processes(self):
        '''Get psutil.Process objects for the processes in this cgroup.

        Processes which exit while the list is being built are left out.
        '''
        procs = []
        for pid in self.pids() or []:
            try:
                procs.append(psutil.Process(pid))
            except psutil.NoSuchProcess:
                continue
        return procs
