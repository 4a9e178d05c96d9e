import pytest
from sqlalchemy import DateTime
from sqlmodel import SQLModel

from admin_portal.models import group, one_time_code, transaction, user  # noqa: F401

TIMESTAMP_COLUMNS = [
    (table.name, column.name)
    for table in SQLModel.metadata.sorted_tables
    for column in table.columns
    if isinstance(column.type, DateTime)
]


def test_every_table_has_timestamps():
    tables = {name for name, _ in TIMESTAMP_COLUMNS}
    assert tables == {"users", "groups", "one_time_codes", "transactions"}


@pytest.mark.parametrize("table,column", TIMESTAMP_COLUMNS)
def test_timestamps_keep_their_offset(table, column):
    # Postgres must store these as timestamptz so UTC survives any server TimeZone
    assert SQLModel.metadata.tables[table].c[column].type.timezone is True
