# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib
"""Run [`po_missing.cli.po_missing`][] on import."""

import sys

if __name__ == '__main__':
    from po_missing.cli import po_missing

    sys.exit(po_missing())
