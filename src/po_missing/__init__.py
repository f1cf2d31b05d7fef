# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Keep gettext catalogs and their "missing translations" companions in sync"""  # noqa: D415

__author__ = 'The po-missing contributors'
__distribution_name__ = 'po-missing'

# Automatically generated.  DO NOT EDIT! Use importlib.metadata instead
# to query the correct values.
__version__ = '0.1.0'
# END automatically generated.
