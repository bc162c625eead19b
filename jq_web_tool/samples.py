from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class Sample:
    name: str
    data: Any


@dataclass(frozen=True)
class QueryTemplate:
    name: str
    query: str
    description: str


@dataclass(frozen=True)
class QuickAction:
    name: str
    query: str
    icon: str

    @property
    def button_label(self) -> str:
        return f"{self.icon} {self.name}"


SAMPLES: Dict[str, Sample] = {
    'simple': Sample(
        name='Sample: simple',
        data={
            'name': 'John Doe',
            'age': 30,
            'email': 'john@example.com',
        },
    ),
    'array': Sample(
        name='Sample: array',
        data=[
            {'id': 1, 'name': 'Tokyo', 'population': 13960000},
            {'id': 2, 'name': 'Osaka', 'population': 8840000},
            {'id': 3, 'name': 'Nagoya', 'population': 2296000},
        ],
    ),
    'nested': Sample(
        name='Sample: nested',
        data={
            'user': {
                'id': 123,
                'profile': {
                    'name': 'Alice',
                    'age': 25,
                    'hobbies': ['reading', 'music', 'travel'],
                },
                'settings': {
                    'theme': 'dark',
                    'notifications': True,
                },
            },
        },
    ),
    'ecommerce': Sample(
        name='Sample: e-commerce',
        data={
            'orders': [
                {
                    'orderId': 'ORD001',
                    'customer': 'Taro Yamada',
                    'items': [
                        {'product': 'Laptop', 'price': 120000, 'quantity': 1},
                        {'product': 'Mouse', 'price': 2500, 'quantity': 2},
                    ],
                    'total': 125000,
                    'status': 'shipped',
                },
                {
                    'orderId': 'ORD002',
                    'customer': 'Hanako Suzuki',
                    'items': [
                        {'product': 'Keyboard', 'price': 8000, 'quantity': 1},
                    ],
                    'total': 8000,
                    'status': 'pending',
                },
            ],
        },
    ),
}

DEFAULT_SAMPLE = 'simple'

QUERY_TEMPLATES: List[QueryTemplate] = [
    QueryTemplate('Whole document', '.', 'Show the JSON unchanged'),
    QueryTemplate('All keys', 'keys', 'List the keys of an object'),
    QueryTemplate('All values', 'values', 'List the values of an object'),
    QueryTemplate('Length', 'length', 'Number of elements of an array or object'),
    QueryTemplate('Expand array', '.[]', 'Output each array element separately'),
    QueryTemplate('First element', '.[0]', 'Take the first element of an array'),
    QueryTemplate('Key/value pairs', 'to_entries', 'Turn an object into key/value pairs'),
    QueryTemplate('Remove duplicates', 'unique', 'Remove duplicate array elements'),
    QueryTemplate('Sort', 'sort', 'Sort an array in ascending order'),
    QueryTemplate('Reverse', 'reverse', 'Reverse an array'),
]

QUICK_ACTIONS: List[QuickAction] = [
    QuickAction('Extract name field', '.name', '📝'),
    QuickAction('Name of each element', '.[].name', '📋'),
    QuickAction('Sort by id', 'sort_by(.id)', '🔢'),
    QuickAction('Filter by age (>25)', 'map(select(.age > 25))', '🔍'),
    QuickAction('Sum of prices', 'map(.price) | add', '➕'),
    QuickAction('Unique by name', 'unique_by(.name)', '✨'),
]


def sample_json(key: str) -> str:
    """Return a sample dataset as 2-space indented JSON text."""
    return json.dumps(SAMPLES[key].data, indent=2, ensure_ascii=False)
