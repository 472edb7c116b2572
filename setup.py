"""
Packaging for httpcompression.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="httpcompression",
    version="0.1.0",
    author="Iyke David",
    author_email="davidiyke04@gmail.com",
    description="gzip/deflate response compression middleware for ASGI applications",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/niceiyke/httpcompression",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "fastapi>=0.68.0",
        "starlette>=0.20.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-asyncio>=0.15.0",
            "pytest-cov>=2.0.0",
            "httpx>=0.19.0",
            "black>=21.0",
            "isort>=5.0.0",
            "mypy>=0.910",
        ],
    },
)
