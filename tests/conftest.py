"""
Shared pytest fixtures.
"""
import json

import pytest
from fastapi.testclient import TestClient

from commandgate.main import app
from commandgate.schemas.office import OFFICE_SCHEMA
from commandgate.services.command_validator import CommandValidator
from commandgate.services.extractor import FieldExtractor

VALID_CREATE = {
    "name": "HQ",
    "openingDate": "2020-01-01",
    "cin": "C1",
    "roc": "R1",
    "companyName": "Acme",
    "companyStatus": "Active",
    "registrationAddress": "Addr",
    "funds": 100,
    "registrationNumber": 5,
    "incorporatedDate": "2019-01-01",
}


def as_json(**fields) -> str:
    return json.dumps(fields)


def create_payload(**overrides) -> str:
    """A valid office create body with `overrides` applied (None drops the key)."""
    body = dict(VALID_CREATE)
    for key, value in overrides.items():
        if value is None:
            body.pop(key, None)
        else:
            body[key] = value
    return json.dumps(body)


@pytest.fixture()
def extractor():
    return FieldExtractor()


@pytest.fixture()
def validator():
    return CommandValidator(OFFICE_SCHEMA, FieldExtractor())


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c
