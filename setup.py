from setuptools import setup, find_packages

setup(
    name="casgraph",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "networkx>=2.6",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    python_requires=">=3.8",
    description="casgraph keeps expression nodes of a node graph in sync with their text.",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    author="Ludwig",
    author_email="yuzeliu@gmail.com",
    url=None,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
