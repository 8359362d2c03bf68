#!/usr/bin/env python3
# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""CLI/Imperative shell for shsecret."""

import logging
import pathlib as pl
from typing import Tuple
from typing import Optional
from typing import NamedTuple

import click

import shsecret

from . import cli_io
from . import shamir
from . import sss_random
from . import common_types as ct

try:
    import pretty_traceback

    pretty_traceback.install(envvar='ENABLE_PRETTY_TRACEBACK')
except ImportError:
    pass  # no need to fail because of missing dev dependency


logger = logging.getLogger("shsecret.cli")


class LogConfig(NamedTuple):
    fmt: str
    lvl: int


LOG_FORMAT_DEFAULT = "%(levelname)-7s - %(message)s"

LOG_FORMAT_VERBOSE = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)-16s - %(message)s"


def _parse_logging_config(verbosity: int) -> LogConfig:
    if verbosity == 0:
        return LogConfig(LOG_FORMAT_DEFAULT, logging.WARNING)
    elif verbosity == 1:
        return LogConfig(LOG_FORMAT_VERBOSE, logging.INFO)
    else:
        assert verbosity >= 2
        return LogConfig(LOG_FORMAT_VERBOSE, logging.DEBUG)


_PREV_VERBOSITY: int = -1


def _configure_logging(verbosity: int = 0) -> None:
    # pylint: disable=global-statement
    global _PREV_VERBOSITY

    if verbosity <= _PREV_VERBOSITY:
        # allow function to be called multiple times
        return

    _PREV_VERBOSITY = verbosity

    # remove previous logging handlers
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)

    log_cfg = _parse_logging_config(verbosity)
    logging.basicConfig(level=log_cfg.lvl, format=log_cfg.fmt, datefmt="%Y-%m-%dT%H:%M:%S")


def echo(msg: str = "") -> bool:
    click.echo(msg)
    return True


_opt_verbose = click.option(
    '-v',
    '--verbose',
    count=True,
    help="Control log level. -vv for debug level.",
)


DEFAULT_SCHEME = "2of3"


_opt_scheme = click.option(
    '-s',
    '--scheme',
    'scheme_arg',
    type=str,
    default=DEFAULT_SCHEME,
    show_default=True,
    help="Threshold and total Number of shares (format: TofN)",
)


@click.group(context_settings={'help_option_names': ["-h", "--help"]})
@_opt_verbose
def cli(verbose: int = 0) -> None:
    """CLI for shsecret: Shamir secret sharing of files."""
    _configure_logging(verbose)


@cli.command()
@click.version_option(version=shsecret.__version__)
def version() -> None:
    """Show version number."""
    echo(f"shsecret version: {shsecret.__version__}")


TRANSFORM_HELP = """Interpolate input files at output points.

\b
Each argument has the form [point][+-][file]:
    [point]  an integer between 0 and 255 (0 if missing)
    [+-]     '-' for an input file, '+' for an output file
    [file]   a file name

\b
To share a secret into 4 shares, any 3 of which can recover it:
    shsecret transform 0-secret.txt 1-/dev/urandom 2-/dev/urandom \\
        1+share1 2+share2 3+share3 4+share4

\b
To recover the secret:
    shsecret transform 1-share1 3-share3 4-share4 0+secret.txt
"""

# Arguments such as "-secret.txt" must not be parsed as options,
# so there are no short options for this command.
TRANSFORM_CONTEXT = {
    'ignore_unknown_options': True,
    'help_option_names'     : ["--help"],
}


@cli.command(help=TRANSFORM_HELP, context_settings=TRANSFORM_CONTEXT)
@click.option('--verbose', count=True, help="Control log level. --verbose --verbose for debug level.")
@click.argument('point_args', nargs=-1, type=click.UNPROCESSED)
def transform(point_args: Tuple[str, ...], verbose: int = 0) -> None:
    _configure_logging(verbose)
    try:
        invocation = cli_io.parse_point_args(point_args)
        cli_io.run_transform(invocation)
    except ValueError as err:
        raise click.ClickException(str(err))


def _parse_scheme_arg(scheme_arg: str) -> shamir.Scheme:
    try:
        return shamir.parse_scheme(scheme_arg)
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint="--scheme")


@cli.command()
@_opt_scheme
@click.option(
    '-o',
    '--prefix',
    type=str,
    default=None,
    help="Prefix for share files (default: the secret file name)",
)
@_opt_verbose
@click.argument('secret_file', type=click.Path(exists=True, dir_okay=False))
def split(
    secret_file: str,
    scheme_arg : str           = DEFAULT_SCHEME,
    prefix     : Optional[str] = None,
    verbose    : int           = 0,
) -> None:
    """Split SECRET_FILE into shares PREFIX.1 .. PREFIX.N"""
    _configure_logging(verbose)

    scheme      = _parse_scheme_arg(scheme_arg)
    secret_path = pl.Path(secret_file)
    secret_arg  = cli_io.PointArg(0, cli_io.INPUT_MARK, secret_path)

    if sss_random.is_debug_random():
        sss_random.reset_debug_random()

    try:
        secret,    = cli_io.read_inputs([secret_arg])
        raw_shares = shamir.split_data(secret, scheme.threshold, scheme.num_shares)
    except ValueError as err:
        raise click.ClickException(str(err))

    out_prefix = secret_path if prefix is None else pl.Path(prefix)
    outputs    = [
        cli_io.PointArg(raw_share.x_coord, cli_io.OUTPUT_MARK, cli_io.share_path(out_prefix, raw_share.x_coord))
        for raw_share in raw_shares
    ]
    cli_io.write_outputs(outputs, [raw_share.data for raw_share in raw_shares])

    for out_arg in outputs:
        echo(f"Share {out_arg.point}/{scheme.num_shares}: {out_arg.path}")


@cli.command()
@click.option(
    '-o',
    '--output',
    type=str,
    required=True,
    help="File to write the recovered data to",
)
@click.option(
    '-x',
    '--point',
    'at_x',
    type=click.IntRange(0, 255),
    default=0,
    show_default=True,
    help="Point to recover, 0 is the secret, others recreate a share",
)
@_opt_verbose
@click.argument('share_files', nargs=-1, required=True, type=click.Path(dir_okay=False))
def join(
    share_files: Tuple[str, ...],
    output     : str,
    at_x       : int = 0,
    verbose    : int = 0,
) -> None:
    """Recover a secret (or share) from SHARE_FILES.

    The point of each share is taken from its file suffix,
    e.g. 'secret.txt.3' is the share for point 3.
    """
    _configure_logging(verbose)

    try:
        share_args = [
            cli_io.PointArg(cli_io.parse_share_point(pl.Path(share_file)), cli_io.INPUT_MARK, pl.Path(share_file))
            for share_file in share_files
        ]
        share_datas = cli_io.read_inputs(share_args)
        raw_shares  = [
            ct.RawShare(share_arg.point, share_data)
            for share_arg, share_data in zip(share_args, share_datas)
        ]
        data = shamir.join_data(raw_shares, at_x=at_x)
    except ValueError as err:
        raise click.ClickException(str(err))

    out_arg = cli_io.PointArg(at_x, cli_io.OUTPUT_MARK, pl.Path(output))
    cli_io.write_outputs([out_arg], [data])

    logger.info(f"recovered point {at_x} from {len(raw_shares)} shares")
    echo(f"Wrote {output}")


if __name__ == '__main__':
    cli()
