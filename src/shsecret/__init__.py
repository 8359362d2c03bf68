# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT
"""shsecret: Shamir Secret Sharing of files.

A cli app and library to split files into shares and recombine them,
using lagrange interpolation over GF(256) with Conway multiplication.
"""

__version__ = "2022.1009-beta"
