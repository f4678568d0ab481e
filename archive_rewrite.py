"""
Распаковка zip-шаблона с заменой имени проекта и package
в именах файлов, папок и в содержимом файлов.
"""

import os
import re
import zipfile

from detection import detect_old_project_data, require_identifiers

MANIFEST_NAME = 'androidmanifest.xml'

DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644

ICON_RE = re.compile(rb'''android:icon\s*=\s*["'][^"']*["']''')
ROUND_ICON_RE = re.compile(rb'''android:roundIcon\s*=\s*["'][^"']*["']''')
LABEL_RE = re.compile(rb'''android:label\s*=\s*["'][^"']*["']''')
VERSION_CODE_RE = re.compile(rb'''versionCode\s*=\s*["'](\d+)["']''')

ICON_VALUE = b'android:icon="@mipmap/ic_launcher"'
ROUND_ICON_VALUE = b'android:roundIcon="@mipmap/ic_launcher_round"'


def _to_bytes(value):
    if isinstance(value, str):
        return value.encode('utf-8')
    return value


def _to_str(value):
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='surrogateescape')
    return value


def replace_all_case_insensitive(data, old, new):
    """
    Заменяет все вхождения old (без учета регистра) на new.

    new вставляется как есть: регистр найденного текста не переносится.
    bytes декодируются как UTF-8 с surrogateescape, поэтому регистр
    сравнивается по Unicode, а не-UTF-8 байты возвращаются без изменений.
    """
    if not old:
        return data
    if isinstance(data, bytes):
        text = data.decode('utf-8', errors='surrogateescape')
        return replace_all_case_insensitive(text, _to_str(old), _to_str(new)).encode(
            'utf-8', errors='surrogateescape')
    pattern = re.compile(re.escape(old), re.IGNORECASE)
    return pattern.sub(lambda m: new, data)


def patch_manifest(data, new_app_label=None):
    """Иконки, название приложения и versionCode + 1 в AndroidManifest.xml"""
    data = ICON_RE.sub(lambda m: ICON_VALUE, data)
    data = ROUND_ICON_RE.sub(lambda m: ROUND_ICON_VALUE, data)
    if new_app_label is not None:
        label = b'android:label="' + _to_bytes(new_app_label) + b'"'
        data = LABEL_RE.sub(lambda m: label, data)
    return VERSION_CODE_RE.sub(
        lambda m: b'versionCode="%d"' % (int(m.group(1)) + 1), data
    )


def is_manifest(path):
    return path.lower().endswith(MANIFEST_NAME)


def entry_mode(info):
    """Права доступа из zip; если их нет - значения по умолчанию"""
    mode = (info.external_attr >> 16) & 0o7777
    if mode:
        return mode
    return DEFAULT_DIR_MODE if info.is_dir() else DEFAULT_FILE_MODE


def rename_entry(name, old_project_name, new_project_name, old_package, new_package):
    """Замена в пути (с учетом регистра): сначала имя проекта, потом package"""
    if old_project_name:
        name = name.replace(old_project_name, new_project_name)
    if old_package:
        name = name.replace(old_package, new_package)
    return name


def destination_path(target_dir, name):
    root = os.path.abspath(target_dir)
    dest = os.path.abspath(os.path.join(root, name))
    if os.path.commonpath([root, dest]) != root:
        raise ValueError(f'Entry escapes target directory: {name}')
    return dest


def _rewrite_archive(zip_path, target_dir, old_project_name, new_project_name,
                     old_package, new_package, old_app_label, new_app_label,
                     patch_manifest_file):
    with zipfile.ZipFile(zip_path) as archive:
        for info in archive.infolist():
            new_name = rename_entry(info.filename, old_project_name, new_project_name,
                                    old_package, new_package)
            dest_path = destination_path(target_dir, new_name)

            if info.is_dir():
                os.makedirs(dest_path, entry_mode(info), exist_ok=True)
                os.chmod(dest_path, entry_mode(info))
                continue

            os.makedirs(os.path.dirname(dest_path), DEFAULT_DIR_MODE, exist_ok=True)

            with archive.open(info) as entry:
                content = entry.read()

            content = replace_all_case_insensitive(content, old_project_name, new_project_name)
            content = replace_all_case_insensitive(content, old_package, new_package)
            if old_app_label and new_app_label is not None:
                content = content.replace(_to_bytes(old_app_label), _to_bytes(new_app_label))

            if patch_manifest_file and is_manifest(new_name):
                content = patch_manifest(content, new_app_label)

            with open(dest_path, 'wb') as f:
                f.write(content)
            os.chmod(dest_path, entry_mode(info))


def unzip_and_replace(zip_path, target_dir, old_project_name, new_project_name,
                      old_package, new_package):
    """Распаковывает шаблон, заменяя имя проекта и package везде"""
    _rewrite_archive(zip_path, target_dir, old_project_name, new_project_name,
                     old_package, new_package, '', None, False)


def unzip_and_replace_full(zip_path, target_dir, old_project_name, new_project_name,
                           old_package, new_package, old_app_label='', new_app_label=None):
    """
    Распаковывает шаблон с полной заменой данных проекта.

    Помимо имени проекта и package заменяет название приложения
    и правит AndroidManifest.xml (иконки, android:label, versionCode).
    При ошибке работа прерывается, уже записанные файлы остаются на диске.
    """
    _rewrite_archive(zip_path, target_dir, old_project_name, new_project_name,
                     old_package, new_package, old_app_label, new_app_label, True)


def unzip_and_replace_auto(zip_path, target_dir, new_project_name, new_package):
    """Старые данные определяются автоматически; возвращает найденные значения"""
    detected = require_identifiers(detect_old_project_data(zip_path))
    unzip_and_replace_full(
        zip_path,
        target_dir,
        detected.project_name,
        new_project_name,
        detected.package,
        new_package,
        detected.app_label,
        new_project_name,
    )
    return detected
