from setuptools import setup, find_packages
from pathlib import Path

here = Path(__file__).parent

setup(
    name="fycal",
    version="0.1.0",
    packages=find_packages(include=["fycal", "fycal.*"]),
    include_package_data=True,
    entry_points={"console_scripts": ["fycal=fycal.main:main"]},
    install_requires=["rich>=13.0.0", "rich-argparse>=1.0.0", "pydantic>=2.0", "pydantic-settings>=2.0"],
    extras_require={"test": ["pytest>=7.0"]},
    author="fycal developers",
    description="📅 Terminal calendar with quarter and fiscal year support",
    long_description=(here / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    python_requires=">=3.8",
)
