import os
import zipfile

TEMPLATE_EXT = '.zip'


def _check_name(name):
    if not name or name in ('.', '..') or '/' in name or '\\' in name:
        raise ValueError(f'Invalid template name: {name!r}')


def template_path(name, templates_dir):
    _check_name(name)
    return os.path.join(templates_dir, name + TEMPLATE_EXT)


def list_templates(templates_dir):
    """Имена шаблонов (без .zip) в папке шаблонов"""
    if not os.path.isdir(templates_dir):
        return []
    names = []
    for fname in os.listdir(templates_dir):
        path = os.path.join(templates_dir, fname)
        if os.path.isfile(path) and fname.endswith(TEMPLATE_EXT):
            names.append(fname[:-len(TEMPLATE_EXT)])
    return sorted(names)


def add_template(folder_path, templates_dir):
    """Упаковывает папку проекта в <templates_dir>/<имя папки>.zip"""
    folder_path = os.path.abspath(folder_path)
    if not os.path.isdir(folder_path):
        raise NotADirectoryError(folder_path)

    name = os.path.basename(folder_path)
    os.makedirs(templates_dir, exist_ok=True)
    zip_path = template_path(name, templates_dir)

    with zipfile.ZipFile(zip_path, 'w', zipfile.ZIP_DEFLATED) as archive:
        for root, dirs, files in os.walk(folder_path):
            dirs.sort()
            rel_root = os.path.relpath(root, folder_path)
            if rel_root != '.':
                archive.write(root, rel_root.replace(os.sep, '/') + '/')
            for fname in sorted(files):
                path = os.path.join(root, fname)
                arcname = os.path.relpath(path, folder_path).replace(os.sep, '/')
                archive.write(path, arcname)
    return name


def remove_template(name, templates_dir):
    """Удаляет шаблон; False если его не было"""
    try:
        os.remove(template_path(name, templates_dir))
    except FileNotFoundError:
        return False
    return True
