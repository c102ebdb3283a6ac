import logging
import sys
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "political-archetype-engine"
LOG_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'


class SurveyJsonFormatter(jsonlogger.JsonFormatter):
    """
    One JSON object per record, tagged with the service name.

    Survey code passes the session id through ``extra={"session_id": ...}``; it lands
    as a top-level field so one respondent's session can be followed across modules.
    """

    def __init__(self, *args, service: str = SERVICE_NAME, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['service'] = self.service
        log_record['location'] = f"{record.module}:{record.lineno}"


def setup_logging(log_level_str: str = "INFO") -> None:
    """
    Configures structured JSON logging for the survey service.
    Safe to call more than once; the JSON handler is only attached the first time.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not any(isinstance(h.formatter, SurveyJsonFormatter) for h in root_logger.handlers):
        log_handler = logging.StreamHandler(sys.stdout)
        log_handler.setFormatter(SurveyJsonFormatter(LOG_FORMAT))
        root_logger.addHandler(log_handler)
        root_logger.info(f"Structured JSON logging configured with level: {logging.getLevelName(log_level)}")

    # Outbound client chatter is only interesting when debugging.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
