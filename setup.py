#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
from pathlib import Path

setup(
    name='txt2epub',
    version='1.0.0',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=[
        'chardet>=5.2.0,<6',
        'pyyaml>=6.0.2',
        'rich>=14.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=8.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'txt2epub=txt2epub.txt2epub_cli:main',
        ],
    },
    author='Emasoft',
    author_email='713559+Emasoft@users.noreply.github.com',
    description='txt2epub - convert plain-text novels (Chinese or English) into EPUB 3 e-books',
    long_description=open('README.md').read() if Path('README.md').exists() else '',
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'Topic :: Text Processing :: Markup',
    ],
    python_requires='>=3.9',
)
