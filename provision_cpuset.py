#!/usr/bin/env python3
# coding: UTF-8

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from coloredlogs import ColoredFormatter

from cgprovision import CpusetProvisioner, Identity, ProvisionConfig
from cgprovision.configs.parsers import ProvisionParser
from cgprovision.exceptions import ProvisionError

MIN_PYTHON = (3, 9)

_STREAM_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)-8s] %(name)s $ %(message)s'
_VERBOSE_FORMAT = ('%(asctime)s.%(msecs)03d [%(levelname)-8s] (%(funcName)s:%(lineno)d in %(filename)s) '
                   '$ %(message)s')


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f'{self.prog}: error: {message}\n')


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog='provision-cpuset',
                             description='Create a cgroup v1 cpuset group owned by the calling user '
                                         'and pin it to the given CPUs.')
    parser.add_argument('name', help='Group name, relative to the cpuset root. e.g. job42')
    parser.add_argument('cpus', help='CPU list written to cpuset.cpus. e.g. 0-3,7')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print more detail log')
    parser.add_argument('--strict', action='store_true',
                        help='Require exact (whitespace-trimmed) equality when verifying cpus and mems')
    parser.add_argument('--config', type=Path, default=None, metavar='CONFIG_JSON',
                        help='JSON file overriding the packaged defaults')
    parser.add_argument('--mount-point', type=Path, default=None,
                        help='Where the cgroup v1 hierarchy is mounted (default: /sys/fs/cgroup)')
    return parser


def setup_logger(verbose: bool) -> logging.Logger:
    logger = logging.getLogger('cgprovision')

    for handler in tuple(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ColoredFormatter(_VERBOSE_FORMAT if verbose else _STREAM_FORMAT))
    logger.addHandler(stream_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    return logger


def load_config(args: argparse.Namespace) -> ProvisionConfig:
    config = ProvisionParser(args.config).parse()

    if args.mount_point is not None:
        config = dataclasses.replace(config, mount_point=args.mount_point)
    if args.strict:
        config = dataclasses.replace(config, strict_match=True)

    return config


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1

    logger = setup_logger(args.verbose)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        logger.critical(f'Invalid configuration: {e}')
        return 1

    identity = Identity.current()

    try:
        provisioner = CpusetProvisioner.from_config(args.name, args.cpus, identity, config)
    except ValueError as e:
        logger.critical(str(e))
        return 1

    try:
        result = asyncio.run(provisioner.run())
    except ProvisionError as e:
        logger.critical(f'ABORTED: {e}')
        return 1

    logger.debug(f'Finished with {result.value}')
    return 0


def run() -> None:
    if sys.version_info < MIN_PYTHON:
        sys.exit('Python {}.{} or later is required.\n'.format(*MIN_PYTHON))

    sys.exit(main())


if __name__ == '__main__':
    run()
