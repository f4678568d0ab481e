import os

from dotenv import load_dotenv

# Загрузка переменных из .env файла
load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    # Папка с шаблонами проектов (*.zip)
    TEMPLATES_DIR = os.environ.get('TEMPLATES_DIR') or 'templates'
    # Куда складываются сгенерированные проекты
    PROJECTS_DIR = os.environ.get('PROJECTS_DIR') or os.path.join(
        os.path.expanduser('~'), 'AndroidStudioProjects'
    )
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
