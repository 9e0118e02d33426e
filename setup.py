#!/usr/bin/env python3
"""
KEYLEDGER Setup Script
Installs the keyledger package and the keyledger-wallet CLI.

Usage:
    pip install .            Install package and CLI
    pip install -e .[dev]    Editable install with test tools
"""

from setuptools import setup, find_packages

setup(
    name='keyledger',
    version='0.1.0',
    description='Wallet identities and signed transfer authorization for an account-balance ledger',
    packages=find_packages(exclude=['tests', 'tests.*']),
    scripts=['keyledger-wallet.py'],
    python_requires='>=3.9',
    install_requires=[
        'ecdsa>=0.18.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
        ],
    },
)
