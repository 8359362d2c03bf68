# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""IO for the command line: point/file arguments, reading and writing files.

Syntax of an argument is "[point][+-][file]" where [point] is an
integer between 0 and 255 (0 if missing), '-' marks an input file and
'+' marks an output file.
"""

import os
import re
import logging
import pathlib as pl
from typing import List
from typing import Tuple
from typing import Optional
from typing import Sequence
from typing import NamedTuple

import click

from . import sss
from . import common_types as ct

logger = logging.getLogger("shsecret.cli_io")


INPUT_MARK  = "-"
OUTPUT_MARK = "+"

POINT_ARG_PATTERN = r"""
    ^
    (?P<point>[0-9]*)
    (?P<mark>[+-])
    (?P<path>.+)
    $
"""

POINT_ARG_RE = re.compile(POINT_ARG_PATTERN, flags=re.VERBOSE | re.DOTALL)


class PointArg(NamedTuple):
    point: ct.PointValue
    mark : str
    path : pl.Path

    @property
    def is_input(self) -> bool:
        return self.mark == INPUT_MARK


class Invocation(NamedTuple):
    inputs : List[PointArg]
    outputs: List[PointArg]


def parse_point(point_str: str) -> ct.PointValue:
    if point_str == "":
        return 0

    point = int(point_str)
    if point >= 256:
        raise ValueError(f"Point value too large: {point_str} (must be < 256)")
    return point


def parse_point_arg(arg: str) -> PointArg:
    match = POINT_ARG_RE.match(arg)
    if match is None:
        raise ValueError(f"Bad argument syntax: '{arg}' (expected [point][+-][file])")

    point = parse_point(match.group('point'))
    return PointArg(point, match.group('mark'), pl.Path(match.group('path')))


def parse_point_args(args: Sequence[str]) -> Invocation:
    inputs : List[PointArg] = []
    outputs: List[PointArg] = []

    for arg in args:
        point_arg = parse_point_arg(arg)
        if point_arg.is_input:
            if any(point_arg.point == in_arg.point for in_arg in inputs):
                raise ValueError(f"Duplicate input point: {point_arg.point}")
            inputs.append(point_arg)
        else:
            if len(outputs) >= sss.MAX_POINTS:
                raise ValueError(f"Too many output points (max {sss.MAX_POINTS})")
            outputs.append(point_arg)

    if not inputs:
        raise ValueError("No input files.")
    if not outputs:
        raise ValueError("No output files.")

    return Invocation(inputs, outputs)


def _read_input(path: pl.Path, ln: Optional[int]) -> bytes:
    if path.is_file():
        data = path.read_bytes()
        if ln is not None and len(data) != ln:
            errmsg = f"Size mismatch: {path} has {len(data)} bytes, expected {ln}"
            raise ValueError(errmsg)
        return data

    if not path.exists():
        raise click.FileError(str(path), hint="no such file")

    # A device such as /dev/urandom or a pipe: read the same number
    # of bytes as the regular input files.
    if ln is None:
        errmsg = f"Cannot determine length from {path}. The first input must be a regular file."
        raise ValueError(errmsg)

    with path.open(mode="rb") as fobj:
        data = fobj.read(ln)

    if len(data) != ln:
        errmsg = f"Short read: {path} gave {len(data)} bytes, expected {ln}"
        raise ValueError(errmsg)
    return data


def read_inputs(inputs: Sequence[PointArg]) -> List[bytes]:
    """Read input files, all of which must have the same length."""
    values: List[bytes] = []
    ln    : Optional[int] = None
    for in_arg in inputs:
        try:
            data = _read_input(in_arg.path, ln)
        except OSError as err:
            raise click.FileError(str(in_arg.path), hint=err.strerror or str(err)) from err

        if ln is None:
            ln = len(data)
        logger.debug(f"read input point {in_arg.point:>3} from '{in_arg.path}' ({len(data)} bytes)")
        values.append(data)
    return values


def _is_special_file(path: pl.Path) -> bool:
    return path.exists() and not path.is_file()


def _tmp_path(path: pl.Path, index: int) -> pl.Path:
    return path.with_name(f".{path.name}.{os.getpid()}.{index}.tmp")


def write_outputs(outputs: Sequence[PointArg], values: Sequence[bytes]) -> None:
    """Write all output files or none of them.

    Symlinks are resolved, so the file they point to is updated and the
    link is kept. Regular (or missing) targets are first written to a
    temporary sibling, which is only renamed to the target after all
    files were written successfully. Devices and pipes (/dev/stdout, a
    fifo) cannot be replaced, they are written to directly once every
    temporary file was written.

    If the same path is given more than once, the last value is written.
    """
    assert len(outputs) == len(values)

    staged: List[Tuple[PointArg, pl.Path, pl.Path]] = []
    direct: List[Tuple[PointArg, pl.Path, bytes  ]] = []

    cur_path = None
    try:
        for index, (out_arg, data) in enumerate(zip(outputs, values)):
            cur_path = out_arg.path
            target   = out_arg.path.resolve()
            if _is_special_file(target):
                direct.append((out_arg, target, data))
                continue

            tmp_path = _tmp_path(target, index)
            staged.append((out_arg, target, tmp_path))
            with tmp_path.open(mode="wb") as fobj:
                fobj.write(data)

        for out_arg, target, data in direct:
            cur_path = out_arg.path
            with target.open(mode="wb") as fobj:
                fobj.write(data)
            logger.debug(f"wrote output point {out_arg.point:>3} to '{out_arg.path}'")

        for out_arg, target, tmp_path in staged:
            cur_path = out_arg.path
            os.replace(tmp_path, target)
            logger.debug(f"wrote output point {out_arg.point:>3} to '{out_arg.path}'")
    except OSError as err:
        for _, _, tmp_path in staged:
            if tmp_path.exists():
                tmp_path.unlink()
        raise click.FileError(str(cur_path), hint=err.strerror or str(err)) from err


def run_transform(invocation: Invocation) -> None:
    in_values  = read_inputs(invocation.inputs)
    in_points  = [in_arg.point for in_arg in invocation.inputs]
    out_points = [out_arg.point for out_arg in invocation.outputs]

    logger.info(f"interpolating {len(in_points)} inputs at {len(out_points)} output points")
    out_values = sss.transform_bytes(in_points, out_points, in_values)
    write_outputs(invocation.outputs, out_values)


SHARE_SUFFIX_RE = re.compile(r"\.(?P<point>[0-9]+)$")


def share_path(prefix: pl.Path, point: ct.PointValue) -> pl.Path:
    return prefix.with_name(f"{prefix.name}.{point}")


def parse_share_point(path: pl.Path) -> ct.PointValue:
    """Parse the x coordinate from the suffix of a share file: 'secret.3' -> 3."""
    match = SHARE_SUFFIX_RE.search(path.name)
    if match is None:
        errmsg = f"Cannot determine point of share '{path}', expected a suffix like '.3'"
        raise ValueError(errmsg)
    return parse_point(match.group('point'))
