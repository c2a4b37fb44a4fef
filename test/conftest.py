import argparse

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--vcd",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="whether to produce vcd files",
    )
    parser.addoption(
        "--seed",
        type=int,
        default=456,
        help="seed for randomized operand streams",
    )


@pytest.fixture
def seed(request):
    return request.config.getoption("--seed")
