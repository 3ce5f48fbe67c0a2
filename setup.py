from setuptools import setup, find_packages

setup(
    name="backforge",
    version="1.0.0",
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'pyyaml>=5.4',          # YAML config files and schema output
    ],
    extras_require={
        'dev': [                                # Development tools
            'pytest>=7.0.0',
            'pytest-mock>=3.6.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'backforge=backforge.cli.main:main',
        ],
    },
    python_requires='>=3.8',
)
