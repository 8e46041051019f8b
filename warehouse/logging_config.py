import logging
import os
import json_log_formatter

class CustomJSONFormatter(json_log_formatter.JSONFormatter):
    def json_record(self, message, extra, record):
        # base record carries message, time and exc_info
        extra = super().json_record(message, extra, record)
        extra['timestamp'] = self.formatTime(record, self.datefmt)
        extra['level'] = record.levelname
        extra['logger'] = record.name
        return extra

def setup_logging(log_dir='logs', app_log_file='app.log', sql_log_file='sql.log', level=logging.INFO):
    os.makedirs(log_dir, exist_ok=True)

    formatter = CustomJSONFormatter()

    # Main application log handlers
    app_handler = logging.FileHandler(os.path.join(log_dir, app_log_file))
    app_handler.setFormatter(formatter)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Statement log handler
    sql_handler = logging.FileHandler(os.path.join(log_dir, sql_log_file))
    sql_handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[app_handler, console_handler],
        force=True,
    )

    # The `sql_queries` logger only writes to sql.log
    sql_logger = logging.getLogger("sql_queries")
    sql_logger.setLevel(logging.INFO)
    for handler in list(sql_logger.handlers):
        sql_logger.removeHandler(handler)
        handler.close()
    sql_logger.addHandler(sql_handler)
    sql_logger.propagate = False
