from datetime import datetime, timedelta
import random
from typing import Generator

from tabular_db.database import Database
from tabular_db.schema import Field
from tabular_db.table import Table


employee_fields: tuple[Field, ...] = (
    Field('Name', 'string'),
    Field('HireDate', 'date'),
)


def employees_2023() -> Table:
    return Table(
        'Employees2023',
        employee_fields,
        (
            {'Name': 'Ann', 'HireDate': datetime(2023, 1, 10)},
            {'Name': 'Bob', 'HireDate': datetime(2023, 5, 2)},
        ),
    )


def employees_2024() -> Table:
    return Table(
        'Employees2024',
        employee_fields,
        (
            {'Name': 'Ann', 'HireDate': datetime(2023, 1, 10)},
        ),
    )


def employees_db() -> Database:
    return Database((employees_2023(), employees_2024()))


booking_fields: tuple[Field, ...] = (
    Field('Guest', 'string'),
    Field('Nights', 'integer'),
    Field('Price', 'float'),
    Field('Paid', 'boolean'),
    Field('Stay', 'date_interval'),
)


def bookings_table(name: str = 'bookings') -> Table:
    return Table(
        name,
        booking_fields,
        (
            {
                'Guest': 'Ann',
                'Nights': 4,
                'Price': 420.5,
                'Paid': True,
                'Stay': '2024-01-01 - 2024-01-05',
            },
            {
                'Guest': 'Bob',
                'Nights': 2,
                'Price': 180.0,
                'Paid': False,
                'Stay': '2024-02-10T14:00 - 2024-02-12T11:00',
            },
            {
                'Guest': 'Eve',
                'Nights': 1,
                'Price': None,
                'Paid': False,
                'Stay': '2024-03-01 - 2024-03-02',
            },
        ),
    )


def employee_stream(
    amount: int = 1_000,
    *,
    start_date: datetime = datetime(2020, 1, 1),
    seed: int | None = None,
) -> Generator[dict, None, None]:
    '''
    Deterministic (given a seed) employee rows, hire dates move forward one
    day per row and carry a random time of day.

    '''
    if amount <= 0:
        raise ValueError('amount must be > 0')

    rnd = random.Random(seed)
    for i in range(amount):
        yield {
            'Name': f'employee-{i:05d}',
            'HireDate': start_date + timedelta(
                days=i,
                seconds=rnd.randrange(24 * 60 * 60),
            ),
        }
