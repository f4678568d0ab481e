"""
Перенос Java/Kotlin исходников в папку нового package
и исправление строки package в файлах.
"""

import os
import re

JAVA_ROOT = os.path.join('app', 'src', 'main', 'java')
SOURCE_EXTENSIONS = ('.kt', '.java')

PACKAGE_LINE_RE = re.compile(r'^package\s+[\w.]+', re.MULTILINE)


def java_root(project_dir):
    return os.path.join(project_dir, JAVA_ROOT)


def package_dir(project_dir, package):
    """com.example.demo -> <project>/app/src/main/java/com/example/demo"""
    return os.path.join(java_root(project_dir), *package.split('.'))


def prune_empty_parents(path, stop_at):
    """Удаляет пустые папки вверх от path, не трогая stop_at"""
    stop_at = os.path.normpath(stop_at)
    parent = os.path.normpath(path)
    while parent != stop_at and parent.startswith(stop_at + os.sep):
        try:
            os.rmdir(parent)
        except OSError:
            # Папка не пустая или уже удалена
            break
        parent = os.path.dirname(parent)


def rename_java_package_dir(project_dir, old_package, new_package):
    """
    Перемещает папку старого package в папку нового package.

    Успех определяется только переименованием: ошибка при удалении
    пустых родительских папок ошибкой не считается.
    Возвращает False, если пути совпадают и делать нечего.
    """
    old_path = package_dir(project_dir, old_package)
    new_path = package_dir(project_dir, new_package)

    if os.path.normpath(old_path) == os.path.normpath(new_path):
        return False

    os.makedirs(os.path.dirname(new_path), 0o755, exist_ok=True)
    os.rename(old_path, new_path)

    prune_empty_parents(os.path.dirname(old_path), java_root(project_dir))
    return True


def fix_package_declaration(text, new_package):
    """Заменяет первую строку package в тексте"""
    return PACKAGE_LINE_RE.sub(lambda m: 'package ' + new_package, text, count=1)


def fix_java_kotlin_package(project_dir, new_package):
    """Обновляет строку package во всех .kt и .java файлах; возвращает измененные файлы"""
    changed = []
    for root, dirs, files in os.walk(java_root(project_dir)):
        dirs.sort()
        for fname in sorted(files):
            if not fname.endswith(SOURCE_EXTENSIONS):
                continue
            path = os.path.join(root, fname)
            with open(path, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
                text = f.read()
            updated = fix_package_declaration(text, new_package)
            if updated != text:
                with open(path, 'w', encoding='utf-8', errors='surrogateescape', newline='') as f:
                    f.write(updated)
                changed.append(path)
    return changed
