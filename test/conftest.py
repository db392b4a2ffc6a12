"""Shared fixtures."""

import json

import pytest

from fakes import ROOT_PAYLOAD, make_api, portal_handler
from src.sinaica.catalog import build_catalog


@pytest.fixture
def root_payload():
    return json.loads(json.dumps(ROOT_PAYLOAD))


@pytest.fixture
def catalog(root_payload):
    return build_catalog(root_payload)


@pytest.fixture
def portal():
    return make_api(portal_handler())
