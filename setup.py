from setuptools import setup, find_packages

setup(
    name="reargs",
    version="0.1.0",
    description="Declarative, regular expression driven command line argument matcher.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(include=["reargs", "reargs.*"]),
    python_requires=">=3.10",
    install_requires=[
        "jinja2>=3.1",
        "pydantic>=2.0",
        "python-json-logger>=3.1",
        "pyyaml>=6.0",
        "rich>=13.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
