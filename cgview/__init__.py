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

'''Read-only access to the cgroup v1 placement of a process.

Example:

    cg = CGroup.new()
    mem = cg.controller(b'memory')
    if mem is not None:
        print(mem.get(b'memory.usage_in_bytes'))
'''

from cgview.cgroup import CGroup, Controller, pid_cgroup
from cgview.error import (AttributeUnreadableError, CgroupError,
                          ProcfsUnreadableError)
