#!/usr/bin/env python
# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT
"""
__main__ module for shsecret.

Enables use as module: $ python -m shsecret
"""


if __name__ == '__main__':
    from . import cli

    cli.cli()
