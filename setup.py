from setuptools import setup, find_packages

setup(
    name="scoreattest",
    version="0.1.0",
    description="Fetch reputation scores and attest them on-chain as fixed-point payloads",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "httpx>=0.24",
        "pydantic>=2.0",
        "web3>=7.0",
        "eth-abi>=5.0",
        "eth-account>=0.13",
        "eth-utils>=2.0",
        "python-json-logger>=3.1",
    ],
    extras_require={"dev": ["pytest>=7.0", "respx>=0.20"]},
    entry_points={"console_scripts": ["scoreattest=scoreattest.cli:main"]},
    python_requires=">=3.10",
    license="CC0-1.0",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "License :: CC0 1.0 Universal (CC0 1.0) Public Domain Dedication",
        "Programming Language :: Python :: 3",
    ],
    keywords="attestation reputation score ethereum eas",
)
