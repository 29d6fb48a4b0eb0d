from setuptools import setup, find_packages
import re

# Read version from tradecalc/__init__.py
with open('tradecalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='trade-calc',
    version=version,
    packages=find_packages(include=['tradecalc', 'tradecalc.*']),
    package_data={
        'tradecalc': ['rules/*.yaml', 'rules/tax/*.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'trade-calc=tradecalc.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Payroll deduction and rigging safety calculations for trades work.',
    python_requires='>=3.10',
)
