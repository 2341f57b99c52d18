import logging.config
import sys

# 배팅 정산/원장 로그는 LOG_LEVEL과 무관하게 항상 남김 (감사 추적)
AUDIT_LOGGERS = (
    "zvcapi.services.settlement_service",
    "zvcapi.services.chicken_cross_service",
    "zvcapi.services.coinflip_service",
)


def setup_logging(log_level: str = "INFO"):
    log_level = log_level.upper()

    loggers = {
        "": {  # root logger
            "handlers": ["console"],
            "level": log_level,
        },
        "zvcapi": {
            "handlers": ["console", "error_console"],
            "level": log_level,
            "propagate": False,
        },
        "uvicorn.error": {
            "handlers": ["console", "error_console"],
            "level": log_level,
            "propagate": False,
        },
        "uvicorn.access": {
            "handlers": ["console"],
            "level": log_level,
            "propagate": False,
        },
        # webhook 요청마다 INFO 로그를 남기므로 경고 이상만
        "httpx": {"level": "WARNING"},
    }
    for name in AUDIT_LOGGERS:
        loggers[name] = {
            "handlers": ["console", "error_console"],
            "level": "INFO",
            "propagate": False,
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
                },
                "detailed": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s\n%(pathname)s:%(lineno)d\n%(message)s",
                },
            },
            "handlers": {
                "console": {
                    "formatter": "simple",
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                },
                "error_console": {
                    "formatter": "detailed",
                    "class": "logging.StreamHandler",
                    "stream": sys.stderr,
                    "level": "WARNING",
                },
            },
            "loggers": loggers,
        }
    )
