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

import json
import logging

from cgview.util.logging import LOG_LEVELS
from cgview.util.singleton import Singleton


class CgviewConfig(metaclass=Singleton):
    '''cgview config loader.

    This is a singleton class that provides methods for loading cgview
    configuration from a file and getting option values by name. Until
    load() is called, every option takes its built-in default.
    '''

    def __init__(self, filename=None):
        self.logger = logging.getLogger('cgview.config')
        self._filename = filename
        self._data = {}
        self._cache = {}

    def load(self):
        '''Load config from a file.

        The file must be in json format.
        '''
        self._data = {}
        self._cache = {}

        if self._filename is None:
            return
        self.logger.info("Loading config from file '%s'", self._filename)
        self._data = self.read()

    def read(self):
        try:
            with open(self._filename, 'r') as f:
                data = json.load(f)
        except IOError as err:
            self.logger.error('Error reading config file: %s', err)
            return {}
        except ValueError as err:
            self.logger.error('Error parsing config file: %s', err)
            return {}
        if not isinstance(data, dict):
            self.logger.error('Error parsing config file: '
                              'expected object at top level')
            return {}
        return data

    def _get(self, name):
        d = self._data
        for k in name.split('.'):
            if not isinstance(d, dict) or k not in d:
                raise KeyError
            d = d[k]
        return d

    def get(self, name, default=None, checkfn=None):
        '''Get the value of a config option.

        To lookup an option in a sub-section, use dot, e.g. 'section.option'.
        In case the option does not exist, the value of 'default' is returned.

        If 'checkfn' argument is not None, it must be a function taking exactly
        one argument. It may raise ValueError or TypeError, in which case the
        retrieved value will be discarded and 'default' will be returned.

        The returned value is cached until the next load().
        '''
        try:
            return self._cache[name]
        except KeyError:
            pass
        try:
            val = self._get(name)
            if checkfn is not None:
                checkfn(val)
        except (KeyError, TypeError, ValueError) as err:
            # do not complain if the option is absent
            if not isinstance(err, KeyError):
                self.logger.warning("Invalid value for config option '%s': %s",
                                    name, err)
            val = default
        self._cache[name] = val
        self.logger.debug('%s = %r', name, val)
        return val

    def get_str(self, name, default=None):
        def checkfn(val):
            t = type(val)
            if t != str:
                raise TypeError("expected string, got '{}'".format(t.__name__))
        return self.get(name, default, checkfn)

    def get_choice(self, name, choices, default=None):
        def checkfn(val):
            t = type(val)
            if t != str:
                raise TypeError("expected string, got '{}'".format(t.__name__))
            if val not in choices:
                raise ValueError("must be one of {}, got "
                                 "{}".format(tuple(choices), str(val)))
        return self.get(name, default, checkfn)

    def cgroup_root(self):
        return self.get_str('Paths.CgroupRoot', '/sys/fs/cgroup')

    def procfs_root(self):
        return self.get_str('Paths.Procfs', '/proc')

    def log_level(self):
        return self.get_choice('Logging.Level', LOG_LEVELS, 'info')
