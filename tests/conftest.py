import itertools

import boto3
import pytest

from message_service import MessageService
from message_store import StoreError


class FakeStore:
    def __init__(self, items=None):
        self.items = list(items or [])
        self.puts = 0

    def put_item(self, item):
        self.puts += 1
        self.items.append(item)

    def scan_all(self):
        return list(self.items)


class BrokenStore:
    def put_item(self, item):
        raise StoreError('Requested resource not found')

    def scan_all(self):
        raise StoreError('Requested resource not found')


@pytest.fixture
def dynamodb_client():
    return boto3.client(
        'dynamodb',
        region_name='us-east-1',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def service(store):
    ids = ('id-{}'.format(n) for n in itertools.count(1))
    return MessageService(store, clock=lambda: 1700000000.7, id_factory=lambda: next(ids))


def http_event(method, body=None, **extra):
    event = {
        'version': '2.0',
        'requestContext': {'http': {'method': method, 'path': '/messages'}},
        'body': body,
    }
    event.update(extra)
    return event
