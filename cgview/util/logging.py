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

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger('cgview').addHandler(logging.NullHandler())

# handler installed by the last setup_logging call
_handler = None


def setup_logging(level=None, stream=None):
    '''Make the 'cgview' logger print to 'stream' (stderr by default).

    'level' is one of the LOG_LEVELS names; if omitted, Logging.Level of
    the loaded config is used. A handler installed by an earlier call is
    replaced. Returns the logger.
    '''
    global _handler
    if level is None:
        from cgview.config import CgviewConfig
        level = CgviewConfig().log_level()
    logger = logging.getLogger('cgview')
    logger.setLevel(LOG_LEVELS[level])

    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    sh = logging.StreamHandler(stream)
    sh.setFormatter(fmt)

    if _handler is not None:
        logger.removeHandler(_handler)
    logger.addHandler(sh)
    _handler = sh
    return logger
