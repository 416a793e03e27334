"""
Setup script for Safety Patrol Report
"""
from setuptools import setup, find_packages
from pathlib import Path

readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding='utf-8') if readme_file.exists() else ""

setup(
    name="safety-patrol-report",
    version="1.0.0",
    description="Safety patrol data collection, alert derivation and AI-written WhatsApp status reports",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Other Audience",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "openai>=1.0.0",
        "google-generativeai>=0.8.0",
        "python-dotenv>=1.0.0",
        "streamlit>=1.37.0",
        "pyperclip>=1.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
            "httpx",
        ],
    },
    entry_points={
        'console_scripts': [
            'patrol-report=main:main',
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
