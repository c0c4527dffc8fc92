import os

from setuptools import setup, find_packages

HERE = os.path.dirname(os.path.abspath(__file__))

def parse_requirements(requirements):
    with open(os.path.join(HERE, requirements)) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements("requirements.txt")

setup(
    name='box_groups',
    version='0.1.0',
    install_requires=requirements,
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.10',
    extras_require={
        "test": [
            "pytest>=7.4",
            "respx>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "box-groups=box_client.cli:cli",
        ],
    }
)
