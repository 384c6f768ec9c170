from setuptools import setup, find_packages


PACKAGE_NAME = "lll"
PACKAGE_VERSION = "0.1.0"
PACKAGE_DESCRIPTION = """Exact LLL lattice basis reduction over arbitrary-precision integers,
with a command line tool for CSV, inline and JSONL batch input
"""
INSTALL_REQUIREMENTS = [
    "numpy",
    "numba",
    "loguru",
    "tqdm",
    "pyyaml",
    "pylint",
    "pytest",
]


setup(
    name=PACKAGE_NAME,
    version=PACKAGE_VERSION,
    description=PACKAGE_DESCRIPTION,
    license="GPLv3",
    packages=find_packages(include=["lll", "lll.*"]),
    install_requires=INSTALL_REQUIREMENTS,
    entry_points={"console_scripts": ["lll = lll.cli:main"]},
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.10",
)
