# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""po-missing internals.

Warning:
    Non-public package (implementation detail).  Subject to change
    without notice, including removal.

"""

import po_missing

__all__ = ()

PROG_NAME = po_missing.__distribution_name__
VERSION = po_missing.__version__
AUTHOR = po_missing.__author__
