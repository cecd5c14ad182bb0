import logging

import pytest
from _pytest.config import Config
from _pytest.config.argparsing import Parser

from ethereum_canonical.blocks import Block
from tests.helpers import cancun_block


def pytest_addoption(parser: Parser) -> None:
    """
    Accept --translation-trace option in pytest.
    """
    parser.addoption(
        "--translation-trace",
        dest="translation_trace",
        default=False,
        action="store_const",
        const=True,
        help="Log every payload the translators read or render",
    )


def pytest_configure(config: Config) -> None:
    """
    Configure the translator log levels to output a translation trace.
    """
    if config.getoption("translation_trace"):
        logging.getLogger("ethereum_rpc").setLevel(logging.DEBUG)


@pytest.fixture(scope="session")
def block() -> Block:
    """
    A signed Cancun block holding one transaction of every variant, a
    contract creation and a withdrawal.
    """
    return cancun_block()
