# Shared fixtures for the table data pipeline tests.

from __future__ import annotations

import pytest

from tabledata import DefaultGetData, TableParams


class RecordingEvents:
    """Observer double capturing pipeline notifications in call order."""

    def __init__(self):
        self.calls = []

    def after_data_filtered(self, params, data):
        self.calls.append(("filtered", list(data)))

    def after_data_sorted(self, params, data):
        self.calls.append(("sorted", list(data)))


@pytest.fixture
def people():
    return [
        {"id": 1, "name": "Carol", "age": 41, "team": {"name": "Lions", "city": "Leipzig"}},
        {"id": 2, "name": "alice", "age": 29, "team": {"name": "Tigers", "city": "Halle"}},
        {"id": 3, "name": "Bob", "age": 35, "team": {"name": "Lions", "city": "Leipzig"}},
        {"id": 4, "name": "dave", "age": 29, "team": {"name": "Bears", "city": "Dresden"}},
        {"id": 5, "name": "Eve", "age": None, "team": {"name": "Tigers", "city": "Halle"}},
    ]


@pytest.fixture
def events():
    return RecordingEvents()


@pytest.fixture
def get_data(events):
    return DefaultGetData(events=events)


@pytest.fixture
def params():
    return TableParams(page=1, count=10)
