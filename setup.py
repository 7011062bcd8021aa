# setup.py
from setuptools import setup, find_packages

setup(
    name="llms_scout",
    version="0.1.0",
    description="Асинхронный краулер сайтов компаний для генерации llms.txt",
    packages=find_packages(exclude=("tests", "tests.*")),  # найдёт папку llms_scout
    package_data={"llms_scout": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.2",
        "Jinja2>=3.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "llms-scout=llms_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
