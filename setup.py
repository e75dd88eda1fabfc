from setuptools import setup, find_packages

with open("requirements.txt") as f:
    required = f.read().splitlines()

setup(
    name="sitedata",
    version="0.0.1",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=required,
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    entry_points={"console_scripts": ["sitedata = sitedata.cli:main"]},
    description="Static site build stage loading JSON/YAML data into document metadata",
)
