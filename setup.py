import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="makeinsertions",
    version="0.1.0",
    author="Ramkrishna Acharya",
    author_email="qramkrishna@gmail.com",
    description="Overlay an insert image onto self-describing template images.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy>=1.21",
        "opencv-python>=4.5",
        "pydantic>=2.0",
        "typer>=0.9",
        "PySide6>=6.8",
        "loguru",
    ],
    entry_points={
        "console_scripts": [
            "make-insertions=makeinsertions.cli:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.1",
            "flake8>=6.0",
        ],
    },
)
