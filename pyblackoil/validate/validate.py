#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyBlackOil - Region based black-oil PVT property engine
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

from pyblackoil.classes import class_dic
from pyblackoil.errors import ConfigurationError

def validate_methods(names, variables):
    """ Converts approach names given as strings into their Enum members
        names: list of keys into class_dic, e.g. ['oilapproach', 'gasapproach']
        variables: list of Enum members or (case insensitive) member names
    """
    variables = list(variables)
    for m, method in enumerate(names):
        if type(variables[m]) == str:
            try:
                variables[m] = class_dic[method][variables[m].upper()]
            except KeyError:
                choices = [e.name for e in class_dic[method]]
                raise ConfigurationError(f"An incorrect {method} was specified: {variables[m]}. Choose from {choices}")
        elif not isinstance(variables[m], class_dic[method]):
            raise ConfigurationError(f"Expected a {class_dic[method].__name__} member, got {variables[m]!r}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables
