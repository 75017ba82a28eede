import logging
import logging.config

def setup_logging(app_config):
    """Применить dictConfig из конфигурации приложения"""
    if app_config.log_to_file:
        app_config.log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(app_config.get_logging_config())
    return logging.getLogger()
