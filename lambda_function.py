import json
import logging
from functools import lru_cache

from guestbook_settings import Settings
from message_service import MessageService, ValidationError
from message_store import MessageStore, StoreError

settings = Settings.from_env()

logger = logging.getLogger()
logger.setLevel(settings.log_level)

CORS_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
}

METHOD_NOT_ALLOWED = 'Método não permitido'
INVALID_BODY = 'Corpo da mensagem inválido.'


""" --- Helpers to build API Gateway proxy responses --- """


def build_response(status_code, body=''):
    """
    Every response carries the CORS headers, errors included. Plain text is
    sent as a JSON string so the body always matches the content type.
    """
    if not isinstance(body, str) or body:
        body = json.dumps(body, ensure_ascii=False)
    return {
        'statusCode': status_code,
        'headers': dict(CORS_HEADERS),
        'body': body,
    }


class InternalError:
    """Failure result of dispatch; turned into a 500 by the outer handler."""

    def __init__(self, message):
        self.message = message

    def __repr__(self):
        return 'InternalError({!r})'.format(self.message)


def get_method(event):
    # HTTP API (v2) first, then REST API (v1) proxy events
    method = ((event.get('requestContext') or {}).get('http') or {}).get('method')
    if not method:
        method = event.get('httpMethod') or ''
    return method.upper()


""" --- Operations --- """


def create_message(service, event):
    try:
        service.create(event.get('body'), event.get('isBase64Encoded', False))
    except ValidationError as e:
        logger.info('invalid request body: {}'.format(e))
        return build_response(400, INVALID_BODY)
    return build_response(201, {'status': 'sucesso'})


def list_messages(service):
    return build_response(200, [message.to_dict() for message in service.list()])


def preflight():
    return build_response(200)


def dispatch(service, event):
    """
    Route the request by HTTP method. Returns a response dict, or an
    InternalError when anything downstream failed.
    """
    try:
        method = get_method(event)
        logger.info('Requisição recebida: {}'.format(method))

        if method == 'POST':
            return create_message(service, event)
        if method == 'GET':
            return list_messages(service)
        if method == 'OPTIONS':
            return preflight()
        return build_response(405, METHOD_NOT_ALLOWED)
    except StoreError as e:
        logger.error('Erro: {}'.format(e))
        return InternalError(str(e))
    except Exception as e:
        logger.exception('Erro: {}'.format(e))
        return InternalError(str(e))


""" --- Main handler --- """


@lru_cache(maxsize=None)
def get_service():
    # built once per container and reused across invocations
    return MessageService(MessageStore.from_settings(settings))


def to_response(result):
    if isinstance(result, InternalError):
        return build_response(500, 'Erro interno: {}'.format(result.message))
    return result


def handle_request(service, event):
    return to_response(dispatch(service, event))


def lambda_handler(event, context):
    try:
        service = get_service()
    except Exception as e:
        logger.exception('Erro: {}'.format(e))
        return to_response(InternalError(str(e)))
    return handle_request(service, event)
