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

import os

import psutil

CGVIEW_ERROR_SUCCESS = 0
CGVIEW_ERROR_PROCFS_UNREADABLE = 1
CGVIEW_ERROR_NO_SUCH_PROCESS = 2
CGVIEW_ERROR_ATTRIBUTE_UNREADABLE = 3


_ERRSTR = {
    0: 'Success',
    1: 'Process cgroup file is unreadable',
    2: 'No such process',
    3: 'Cgroup attribute is unreadable',
}


def strerror(err):
    return _ERRSTR.get(err, 'Unknown error')


class CgroupError(Exception):

    def __init__(self, errno, path=None, cause=None):
        self.errno = errno
        self.path = path
        self.cause = cause

    def __str__(self):
        s = strerror(self.errno)
        if self.path is not None:
            s += ": '%s'" % os.fsdecode(self.path)
        if self.cause is not None:
            s += ' (%s)' % (getattr(self.cause, 'strerror', None) or self.cause)
        return s


class ProcfsUnreadableError(CgroupError):
    '''Raised when /proc/<pid>/cgroup cannot be read.

    'errno' is CGVIEW_ERROR_NO_SUCH_PROCESS if the process is gone at the
    moment of the failure, CGVIEW_ERROR_PROCFS_UNREADABLE otherwise. The
    process is only looked up if 'live' is set, that is if the file was read
    from the real procfs of this system.
    '''

    def __init__(self, pid, path, cause, live=True):
        self.pid = pid
        errno = CGVIEW_ERROR_PROCFS_UNREADABLE
        if live and not self.pid_exists:
            errno = CGVIEW_ERROR_NO_SUCH_PROCESS
        super().__init__(errno, path, cause)

    @property
    def pid_exists(self):
        return psutil.pid_exists(self.pid)


class AttributeUnreadableError(CgroupError):

    def __init__(self, path, cause):
        super().__init__(CGVIEW_ERROR_ATTRIBUTE_UNREADABLE, path, cause)
