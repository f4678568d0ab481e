#!/usr/bin/env python3
"""
Launcher Icon Generator for Android Template Helper
Скрипт для генерации иконок Android-приложения из одного изображения
"""

import argparse
import glob
import os

from PIL import Image, ImageOps

RES_DIR = os.path.join('app', 'src', 'main', 'res')
MANIFEST_PATH = os.path.join('app', 'src', 'main', 'AndroidManifest.xml')

# Папка плотности -> размер иконки в пикселях
ICON_SIZES = [
    ('mipmap-mdpi', 48),
    ('mipmap-hdpi', 72),
    ('mipmap-xhdpi', 96),
    ('mipmap-xxhdpi', 144),
    ('mipmap-xxxhdpi', 192),
]

ICON_NAMES = ['ic_launcher', 'ic_launcher_round']

# Векторные заглушки, которые перекрывают png-иконки
STALE_ICON_GLOBS = [
    'mipmap-*/ic_launcher.xml',
    'mipmap-*/ic_launcher_round.xml',
    'drawable*/ic_launcher.xml',
    'drawable*/ic_launcher_round.xml',
]

ICON_ATTR = 'android:icon="@mipmap/ic_launcher"'
ROUND_ICON_ATTR = 'android:roundIcon="@mipmap/ic_launcher_round"'


def remove_if_exists(path):
    try:
        os.remove(path)
    except OSError:
        # Очистка необязательная: отсутствие или ошибка удаления не мешают
        pass


def resize_icon(logo, output_size):
    """Создает квадратную иконку заданного размера из логотипа"""
    # Масштабируем с сохранением пропорций
    scaled = ImageOps.contain(logo, (output_size, output_size), Image.Resampling.LANCZOS)

    # Квадратное изображение с прозрачным фоном, логотип по центру
    icon = Image.new('RGBA', (output_size, output_size), (0, 0, 0, 0))
    x = (output_size - scaled.width) // 2
    y = (output_size - scaled.height) // 2
    icon.paste(scaled, (x, y), scaled)
    return icon


def replace_android_icons(project_dir, icon_path):
    """Генерирует иконки всех плотностей и удаляет старые .webp и .xml варианты"""
    with Image.open(icon_path) as source:
        logo = source.convert('RGBA')

    res_dir = os.path.join(project_dir, RES_DIR)
    for folder, size in ICON_SIZES:
        icon_dir = os.path.join(res_dir, folder)
        os.makedirs(icon_dir, 0o755, exist_ok=True)
        icon = resize_icon(logo, size)
        for name in ICON_NAMES:
            icon.save(os.path.join(icon_dir, name + '.png'), 'PNG')
            remove_if_exists(os.path.join(icon_dir, name + '.webp'))

    for pattern in STALE_ICON_GLOBS:
        for path in glob.glob(os.path.join(res_dir, pattern)):
            remove_if_exists(path)


def ensure_manifest_icons(manifest_path):
    """Добавляет android:icon и android:roundIcon в <application>, если их нет"""
    with open(manifest_path, 'r', encoding='utf-8', newline='') as f:
        text = f.read()

    updated = text
    if 'android:icon="' not in updated:
        updated = updated.replace('<application', '<application ' + ICON_ATTR, 1)
    if 'android:roundIcon="' not in updated:
        updated = updated.replace('<application', '<application ' + ROUND_ICON_ATTR, 1)

    if updated == text:
        return False
    with open(manifest_path, 'w', encoding='utf-8', newline='') as f:
        f.write(updated)
    return True


def main():
    parser = argparse.ArgumentParser(description='Генератор иконок Android-проекта')
    parser.add_argument('--project', '-p', required=True, help='Папка Android-проекта')
    parser.add_argument('--icon', '-i', required=True, help='Путь к исходному изображению')
    parser.add_argument('--manifest', '-m', action='store_true',
                        help='Добавить атрибуты иконок в AndroidManifest.xml')

    args = parser.parse_args()

    print(f"[INFO] Generating launcher icons from {args.icon}")
    try:
        replace_android_icons(args.project, args.icon)
    except OSError as e:
        print(f"[ERROR] Error creating icons: {e}")
        return 1
    for folder, size in ICON_SIZES:
        print(f"[OK] {folder}: {size}x{size}")

    if args.manifest:
        manifest_path = os.path.join(args.project, MANIFEST_PATH)
        try:
            if ensure_manifest_icons(manifest_path):
                print(f"[OK] Updated {manifest_path}")
        except OSError as e:
            print(f"[ERROR] Error updating manifest: {e}")
            return 1

    print("[SUCCESS] Generation completed!")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
