"""Setup script for Telemetry Hub CLI."""

from setuptools import setup, find_packages
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Telemetry Hub CLI - send control commands to field probes via the telemetry hub"

setup(
    name='telemetry-hub-cli',
    version='0.1.0',
    description='Command-line front end for sending control commands to telemetry hub probes',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    author='Telemetry Hub CLI Team',
    author_email='dev@example.com',

    packages=find_packages(include=['telemetry_cli', 'telemetry_cli.*']),
    python_requires='>=3.8',
    install_requires=[
        'requests>=2.31.0',
        'pydantic>=2.0.0',
        'click>=8.1.0',
        'python-dotenv>=1.0.0',
        'tomli>=2.0.0',
    ],

    extras_require={
        'yaml': ['pyyaml>=6.0'],
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.5.0',
        ],
    },

    entry_points={
        'console_scripts': [
            'telemetry-cli=telemetry_cli.cli:cli',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: System Administrators',
        'Topic :: System :: Monitoring',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='telemetry probes hub cli command-language',

    include_package_data=True,
    zip_safe=False,
)
