import io
import json

import structlog

from shadenbt.log import LoggingOutput, setup_logging


def _log_to(stream: io.StringIO, *, debug: bool) -> None:
    setup_logging(logging_output=LoggingOutput.JSON, debug=debug, stream=stream)
    try:
        logger = structlog.get_logger('shadenbt.test_log')
        logger.debug('debug event', answer=42)
        logger.info('info event')
    finally:
        setup_logging(logging_output=LoggingOutput.PRETTY, debug=False)


def test_json_output() -> None:
    stream = io.StringIO()
    _log_to(stream, debug=True)
    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [record['event'] for record in records] == ['debug event', 'info event']
    assert records[0]['answer'] == 42
    assert records[0]['level'] == 'debug'
    assert records[0]['logger'] == 'shadenbt.test_log'


def test_debug_is_filtered_by_default() -> None:
    stream = io.StringIO()
    _log_to(stream, debug=False)
    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [record['event'] for record in records] == ['info event']
