import zipfile

import pytest

from conftest import make_zip
from detection import (
    DetectionRule,
    InvalidTemplateError,
    detect_old_project_data,
    require_identifiers,
)


def test_detects_name_package_and_label(demo_zip):
    detected = detect_old_project_data(demo_zip)

    assert detected.project_name == 'DemoProject'
    assert detected.package == 'com.example.demo'
    assert detected.app_label == 'Demo App'


def test_first_match_wins(tmp_path):
    zip_path = make_zip(tmp_path / 't.zip', [
        ('settings.gradle', 'rootProject.name = "First"\n'),
        ('lib/settings.gradle', "rootProject.name = 'Second'\n"),
        ('app/src/main/AndroidManifest.xml', '<manifest package="com.first" />'),
        ('other/AndroidManifest.xml', '<manifest package="com.second" />'),
    ])

    detected = detect_old_project_data(str(zip_path))

    assert detected.project_name == 'First'
    assert detected.package == 'com.first'
    assert detected.app_label == ''


def test_application_id_fallback(tmp_path):
    zip_path = make_zip(tmp_path / 't.zip', [
        ('settings.gradle', "rootProject.name = 'Demo'\n"),
        ('app/build.gradle', 'defaultConfig {\n    applicationId "com.example.gradle"\n}\n'),
    ])

    assert detect_old_project_data(str(zip_path)).package == 'com.example.gradle'


def test_application_id_kotlin_dsl(tmp_path):
    zip_path = make_zip(tmp_path / 't.zip', [
        ('settings.gradle.kts', 'rootProject.name = "Demo"\n'),
        ('app/build.gradle.kts', 'defaultConfig {\n    applicationId = "com.example.kts"\n}\n'),
    ])

    detected = detect_old_project_data(str(zip_path))

    assert detected.project_name == 'Demo'
    assert detected.package == 'com.example.kts'


def test_manifest_package_preferred_within_same_file(tmp_path):
    zip_path = make_zip(tmp_path / 't.zip', [
        ('app/build.gradle', 'package = "com.xml.form"\napplicationId "com.gradle.form"\n'),
    ])

    assert detect_old_project_data(str(zip_path)).package == 'com.xml.form'


def test_unrelated_files_are_ignored(tmp_path):
    zip_path = make_zip(tmp_path / 't.zip', [
        ('README.md', "rootProject.name = 'Nope'\npackage=\"com.nope\"\n"),
        ('app/', None),
    ])

    detected = detect_old_project_data(str(zip_path))

    assert detected == ('', '', '')


def test_custom_rules(tmp_path):
    zip_path = make_zip(tmp_path / 't.zip', [
        ('pubspec.yaml', 'name: flutter_demo\n'),
        ('settings.gradle', "rootProject.name = 'Ignored'\n"),
    ])
    rules = [DetectionRule('project_name', r'^name:\s*(\S+)', markers=['pubspec.yaml'])]

    detected = detect_old_project_data(str(zip_path), rules=rules)

    assert detected.project_name == 'flutter_demo'
    assert detected.package == ''


def test_rule_matching_is_case_insensitive():
    rule = DetectionRule('package', r'package="([^"]+)"')

    assert rule.matches('App/src/main/AndroidManifest.XML')
    assert not rule.matches('app/src/main/java/Main.kt')
    assert rule.extract('<manifest package="com.a.b">') == 'com.a.b'
    assert rule.extract('<manifest>') is None


def test_missing_archive(tmp_path):
    with pytest.raises(FileNotFoundError):
        detect_old_project_data(str(tmp_path / 'missing.zip'))


def test_corrupt_archive(tmp_path):
    path = tmp_path / 'broken.zip'
    path.write_bytes(b'not a zip at all')

    with pytest.raises(zipfile.BadZipFile):
        detect_old_project_data(str(path))


def test_require_identifiers(demo_zip):
    detected = detect_old_project_data(demo_zip)
    assert require_identifiers(detected) is detected

    with pytest.raises(InvalidTemplateError):
        require_identifiers(detected._replace(package=''))
    with pytest.raises(ValueError):
        require_identifiers(detected._replace(project_name=''))
