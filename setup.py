from setuptools import find_namespace_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="cset",
    version="1.0.0",
    description="A mutable set container with set algebra, recursive flattening, partitioning, and a sorted variant.",
    packages=find_namespace_packages(include=["cset", "cset.*"]),
    python_requires=">=3.9",
    extras_require={"test": ["pytest", "hypothesis"]},
    long_description = long_description,
    long_description_content_type = "text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
