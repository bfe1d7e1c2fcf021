from loguru import logger
import os
import yaml

CONFIG_PATH = os.environ.get("SOAP_CLIENT_CONFIG", "config.yaml")
LOG_DIR = os.environ.get("SOAP_CLIENT_LOG_DIR", "logs")


def load_debug_config():
    """Загружает только debug настройки для логирования из config.yaml"""
    try:
        with open(CONFIG_PATH, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
            return config.get('debug_console_output', False)
    except Exception:
        # Если файл не найден или ошибка - возвращаем дефолт
        return False


# Загружаем только debug настройку для логирования
debug_console_output = load_debug_config()

# Создаём папку для логов если её нет
os.makedirs(LOG_DIR, exist_ok=True)

# Убираем стандартный вывод в консоль только если debug_console_output = False
if not debug_console_output:
    logger.remove()

# Основной лог (только в файл)
logger.add(
    os.path.join(LOG_DIR, "log.log"),
    format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {function} | {message}",
    rotation="10 MB",
    retention=3,
    level="DEBUG"
)

# Лог ошибок (только в файл)
logger.add(
    os.path.join(LOG_DIR, "error.log"),
    backtrace=True,
    diagnose=True,
    rotation="5 MB",
    retention=2,
    filter=lambda record: record["level"].name == "ERROR",
    format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {function} | {message}"
)


def print_and_log(message: str, level: str = "INFO"):
    """
    Выводит сообщение в консоль и записывает в лог.

    Args:
        message: Сообщение для вывода
        level: Уровень логирования (INFO, WARNING, ERROR, SUCCESS, DEBUG)
    """
    print(message)

    if level == "WARNING":
        logger.warning(message)
    elif level == "ERROR":
        logger.error(message)
    elif level == "SUCCESS":
        logger.success(message)
    elif level == "DEBUG":
        logger.debug(message)
    else:
        logger.info(message)
