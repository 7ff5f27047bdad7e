# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""VersionGnome - groups video files into stacks, extras and alternate versions."""

from versiongnome.__about__ import __version__

__all__ = ["__version__"]
