import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="fluri",
    version="1.0.0",
    description="A fluent URI mutation API built on top of yarl.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "yarl>=1.12",
        "multidict",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
