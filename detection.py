"""
Определение старых данных проекта (имя, package, название приложения)
по содержимому zip-шаблона.
"""

import re
import zipfile
import zlib
from collections import namedtuple

# Файлы, в которых ищем идентификаторы
DEFAULT_MARKERS = (
    'settings.gradle',
    'build.gradle',
    'androidmanifest.xml',
    'res/values/strings.xml',
)

DetectedProject = namedtuple('DetectedProject', ['project_name', 'package', 'app_label'])


class InvalidTemplateError(ValueError):
    """Шаблон не содержит имени проекта или package"""


class DetectionRule:
    """Правило: к каким файлам применяется и как извлекает значение"""

    def __init__(self, field, pattern, markers=DEFAULT_MARKERS):
        self.field = field
        self.pattern = re.compile(pattern)
        self.markers = tuple(markers)

    def matches(self, name):
        lower = name.lower()
        return any(marker in lower for marker in self.markers)

    def extract(self, text):
        m = self.pattern.search(text)
        if m:
            return m.group(1)
        return None


DEFAULT_RULES = [
    # settings.gradle: rootProject.name = 'DemoProject'
    DetectionRule('project_name', r'''rootProject\.name\s*=\s*['"]([^'"]+)['"]'''),
    # AndroidManifest.xml: package="com.example.demo"
    DetectionRule('package', r'''package\s*=\s*['"]([^'"]+)['"]'''),
    # build.gradle: applicationId "com.example.demo" (или applicationId = "..." в .kts)
    DetectionRule('package', r'''applicationId\s*=?\s*['"]([^'"]+)['"]'''),
    # strings.xml: <string name="app_name">Demo</string>
    DetectionRule('app_label', r'''<string\s+name="app_name"\s*>([^<]+)</string>'''),
]


def detect_old_project_data(zip_path, rules=None):
    """
    Ищет имя проекта, package и название приложения в шаблоне.

    Первое найденное значение для каждого поля выигрывает, последующие
    совпадения игнорируются. Ненайденные поля возвращаются пустыми строками.
    """
    rules = DEFAULT_RULES if rules is None else rules
    found = {field: '' for field in DetectedProject._fields}

    with zipfile.ZipFile(zip_path) as archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            applicable = [rule for rule in rules if rule.matches(info.filename)]
            if not applicable:
                continue
            try:
                with archive.open(info) as entry:
                    text = entry.read().decode('utf-8', errors='replace')
            except (OSError, zipfile.BadZipFile, zlib.error, RuntimeError):
                # Битый или зашифрованный файл пропускаем
                continue

            for rule in applicable:
                if found[rule.field]:
                    continue
                value = rule.extract(text)
                if value:
                    found[rule.field] = value

    return DetectedProject(**found)


def require_identifiers(detected):
    """Проверяет, что имя проекта и package найдены"""
    if not detected.project_name or not detected.package:
        raise InvalidTemplateError(
            'Не удалось определить имя проекта или package в шаблоне'
        )
    return detected
