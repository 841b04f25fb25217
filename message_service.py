import json
import time
import uuid
import base64
import binascii
import logging
from dataclasses import dataclass

logger = logging.getLogger()


class ValidationError(Exception):
    pass


""" --- Message record --- """


@dataclass(frozen=True)
class Message:
    id: str
    text: str
    created_at: int

    def to_item(self):
        return {
            'message_id': {'S': self.id},
            'message': {'S': self.text},
            'timestamp': {'N': str(self.created_at)},
        }

    @classmethod
    def from_item(cls, item):
        stamp = item['timestamp']
        return cls(
            id=item['message_id']['S'],
            text=item['message']['S'],
            created_at=int(stamp['N'] if 'N' in stamp else stamp['S']),
        )

    def to_dict(self):
        return {
            'message_id': self.id,
            'message': self.text,
            'timestamp': self.created_at,
        }


""" --- Request body helpers --- """


def decode_body(body, is_base64_encoded=False):
    if body is None:
        raise ValidationError('request body is missing')
    if not is_base64_encoded:
        return body
    try:
        return base64.b64decode(body, validate=True).decode('utf-8')
    except (binascii.Error, ValueError) as e:
        raise ValidationError('request body is not valid base64: {}'.format(e)) from e


def parse_message_text(body):
    """
    Pull the required 'message' field out of a JSON request body.
    Raises ValidationError unless it is a non-empty string.
    """
    try:
        document = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ValidationError('request body is not valid JSON: {}'.format(e)) from e

    if not isinstance(document, dict):
        raise ValidationError('request body must be a JSON object')

    text = document.get('message')
    if not isinstance(text, str) or not text:
        raise ValidationError("field 'message' must be a non-empty string")
    return text


""" --- Service --- """


class MessageService:
    """
    Create and list guestbook messages. Holds no per-request state, so one
    instance serves every invocation of the process.
    """

    def __init__(self, store, clock=time.time, id_factory=uuid.uuid4):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def create(self, body, is_base64_encoded=False):
        text = parse_message_text(decode_body(body, is_base64_encoded))

        message = Message(
            id=str(self.id_factory()),
            text=text,
            created_at=int(self.clock()),
        )
        self.store.put_item(message.to_item())

        logger.info('Mensagem salva com sucesso.')
        return message

    def list(self):
        items = self.store.scan_all()
        logger.info('Encontradas {} mensagens.'.format(len(items)))

        messages = [Message.from_item(item) for item in items]
        # stable sort: equal timestamps keep scan order
        return sorted(messages, key=lambda m: m.created_at)
