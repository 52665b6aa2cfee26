from setuptools import setup, find_packages

setup(
    name="zkrounds_package",
    version="0.1.0",
    description="A package to verify Groth16 proofs over BN254 in rounds of bounded cost",
    url="https://github.com/yourusername/zkrounds_package",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=["py_ecc"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
)
