from setuptools import find_packages, setup

setup(
    name="cmdline-options",
    version="0.1.0",
    description="Declarative command-line option matching with mutually-exclusive groups.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.10",
    install_requires=[
        "rich",
        "prompt_toolkit",
        "pydantic>=2",
        "PyYAML",
        "toml",
        "python-dateutil",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
