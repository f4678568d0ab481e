import os
import zipfile

import pytest


MANIFEST = '''<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    package="com.example.demo"
    android:versionCode="3"
    android:versionName="1.0">

    <application
        android:allowBackup="true"
        android:icon="@drawable/old_icon"
        android:roundIcon='@drawable/old_round'
        android:label="@string/app_name"
        android:theme="@style/Theme.DemoProject">
        <activity android:name="com.example.demo.MainActivity" android:exported="true" />
    </application>
</manifest>
'''

SETTINGS_GRADLE = "rootProject.name = 'DemoProject'\ninclude ':app'\n"

BUILD_GRADLE = '''android {
    namespace 'com.example.demo'
    defaultConfig {
        applicationId "com.example.demo"
        versionCode 3
    }
}
'''

STRINGS_XML = '''<resources>
    <string name="app_name">Demo App</string>
    <string name="welcome">Welcome to Demo App</string>
</resources>
'''

MAIN_ACTIVITY = '''package com.example.demo

import android.os.Bundle

// DemoProject main screen, demoproject, DEMOPROJECT
class MainActivity
'''

UTILS_JAVA = '''package com.example.demo;

public class Utils {}
'''

PNG_BYTES = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe\x00binary'


def make_zip(path, entries):
    """
    entries: список (имя, содержимое, права); имя с '/' на конце - папка.
    """
    with zipfile.ZipFile(path, 'w', zipfile.ZIP_DEFLATED) as archive:
        for entry in entries:
            name, content = entry[0], entry[1]
            mode = entry[2] if len(entry) > 2 else None
            info = zipfile.ZipInfo(name)
            if name.endswith('/'):
                info.external_attr = ((mode or 0o755) | 0o040000) << 16 | 0x10
                archive.writestr(info, b'')
                continue
            if mode is not None:
                info.external_attr = (mode | 0o100000) << 16
            if isinstance(content, str):
                content = content.encode('utf-8')
            archive.writestr(info, content)
    return path


DEMO_ENTRIES = [
    ('settings.gradle', SETTINGS_GRADLE, 0o644),
    ('DemoProject.iml', '<module name="DemoProject" />\n', 0o644),
    ('gradlew', '#!/bin/sh\necho DemoProject\n', 0o755),
    ('app/', None, 0o755),
    ('app/build.gradle', BUILD_GRADLE, 0o644),
    ('app/src/main/AndroidManifest.xml', MANIFEST, 0o644),
    ('app/src/main/res/values/strings.xml', STRINGS_XML, 0o644),
    ('app/src/main/res/mipmap-hdpi/ic_launcher.png', PNG_BYTES, 0o644),
    ('app/src/main/java/com/example/demo/MainActivity.kt', MAIN_ACTIVITY, 0o644),
    ('app/src/main/java/com/example/demo/Utils.java', UTILS_JAVA, 0o644),
    ('docs/demoproject-notes.txt', 'notes for DemoProject\n', 0o644),
]


@pytest.fixture
def demo_zip(tmp_path):
    return str(make_zip(tmp_path / 'DemoProject.zip', DEMO_ENTRIES))


@pytest.fixture
def target_dir(tmp_path):
    return str(tmp_path / 'out' / 'MyApp')


def read_text(*parts):
    with open(os.path.join(*parts), 'r', encoding='utf-8') as f:
        return f.read()
