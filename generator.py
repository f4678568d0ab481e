from flask import Blueprint, jsonify, request, current_app
import os
import zipfile

from archive_rewrite import rename_entry, unzip_and_replace_auto
from detection import detect_old_project_data, InvalidTemplateError
from generate_launcher_icons import replace_android_icons, ensure_manifest_icons, MANIFEST_PATH
from package_relocation import package_dir, rename_java_package_dir, fix_java_kotlin_package
import template_store

generator_bp = Blueprint('generator', __name__, url_prefix='/api')


def generate_project(zip_path, target_dir, project_name, package_name, icon_path=None):
    """
    Создает новый проект из шаблона.

    Распаковка с заменой -> перенос папки package -> строки package
    -> иконки (если указан icon_path) -> атрибуты иконок в манифесте.
    """
    detected = unzip_and_replace_auto(zip_path, target_dir, project_name, package_name)

    relocated = False
    if detected.package != package_name:
        # Пути в архиве уже прошли замену имени проекта
        extracted_package = rename_entry(
            detected.package.replace('.', '/'),
            detected.project_name, project_name,
            detected.package, package_name,
        ).replace('/', '.')
        # Шаблон без исходников: переносить нечего
        if os.path.isdir(package_dir(target_dir, extracted_package)):
            relocated = rename_java_package_dir(target_dir, extracted_package, package_name)
        fix_java_kotlin_package(target_dir, package_name)

    if icon_path:
        replace_android_icons(target_dir, icon_path)

    manifest_path = os.path.join(target_dir, MANIFEST_PATH)
    if os.path.exists(manifest_path):
        ensure_manifest_icons(manifest_path)

    return {
        'target_dir': target_dir,
        'old_project_name': detected.project_name,
        'old_package': detected.package,
        'old_app_label': detected.app_label,
        'relocated': relocated,
    }


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def _templates_dir():
    return current_app.config['TEMPLATES_DIR']


@generator_bp.route('/templates', methods=['GET'])
def list_templates():
    """Список доступных шаблонов"""
    return jsonify({
        'success': True,
        'templates': template_store.list_templates(_templates_dir())
    })


@generator_bp.route('/templates', methods=['POST'])
def add_template():
    """Добавить шаблон из папки проекта"""
    data = request.get_json(silent=True) or {}
    folder = (data.get('folder') or '').strip()
    if not folder:
        return _error('Не указана папка проекта', 400)
    try:
        name = template_store.add_template(folder, _templates_dir())
    except NotADirectoryError:
        return _error(f'Папка не найдена: {folder}', 400)
    except (OSError, ValueError) as e:
        return _error(str(e), 500)
    return jsonify({'success': True, 'name': name}), 201


@generator_bp.route('/templates/<name>', methods=['DELETE'])
def remove_template(name):
    """Удалить шаблон"""
    try:
        removed = template_store.remove_template(name, _templates_dir())
    except ValueError as e:
        return _error(str(e), 400)
    except OSError as e:
        return _error(str(e), 500)
    if not removed:
        return _error('Шаблон не найден', 404)
    return jsonify({'success': True})


@generator_bp.route('/templates/<name>/detect', methods=['GET'])
def detect_template(name):
    """Имя проекта, package и название приложения из шаблона"""
    try:
        zip_path = template_store.template_path(name, _templates_dir())
    except ValueError as e:
        return _error(str(e), 400)
    if not os.path.isfile(zip_path):
        return _error('Шаблон не найден', 404)
    try:
        detected = detect_old_project_data(zip_path)
    except (OSError, zipfile.BadZipFile) as e:
        return _error(str(e), 500)
    return jsonify({'success': True, **detected._asdict()})


@generator_bp.route('/generate', methods=['POST'])
def generate():
    """Сгенерировать проект из шаблона"""
    data = request.get_json(silent=True) or {}
    template = (data.get('template') or '').strip()
    project_name = (data.get('project_name') or '').strip()
    package_name = (data.get('package_name') or '').strip()
    icon_path = (data.get('icon_path') or '').strip() or None

    if not template:
        return _error('Шаблон не выбран', 400)
    if not project_name or not package_name:
        return _error('Имя проекта и package обязательны', 400)

    try:
        zip_path = template_store.template_path(template, _templates_dir())
    except ValueError as e:
        return _error(str(e), 400)
    if not os.path.isfile(zip_path):
        return _error('Шаблон не найден', 404)

    target_dir = (data.get('target_dir') or '').strip() or os.path.join(
        current_app.config['PROJECTS_DIR'], project_name
    )

    try:
        result = generate_project(zip_path, target_dir, project_name, package_name, icon_path)
    except InvalidTemplateError as e:
        return _error(str(e), 400)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        return _error(str(e), 500)

    return jsonify({'success': True, **result})
