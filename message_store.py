import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger()


class StoreError(Exception):
    pass


class MessageStore:
    """
    Guestbook table access through the low-level DynamoDB client.
    Items are attribute maps, e.g. {'message_id': {'S': '...'}}.
    """

    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name

    @classmethod
    def from_settings(cls, settings):
        client = boto3.client(
            'dynamodb',
            region_name=settings.region_name,
            endpoint_url=settings.endpoint_url,
        )
        return cls(client, settings.table_name)

    def put_item(self, item):
        try:
            self.client.put_item(TableName=self.table_name, Item=item)
        except (ClientError, BotoCoreError) as e:
            raise StoreError(str(e)) from e

    def scan_all(self):
        items = []
        query = {'TableName': self.table_name}

        while True:
            try:
                response = self.client.scan(**query)
            except (ClientError, BotoCoreError) as e:
                raise StoreError(str(e)) from e

            items.extend(response.get('Items', []))

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            logger.debug('scan continues after key {}'.format(last_key))
            query['ExclusiveStartKey'] = last_key

        return items
