from setuptools import setup, find_packages

# Step 1: scan every sub package under src (["core", "core.state_machine", "model", "utils"])
src_sub_packages = find_packages(where="src")

# Step 2: prefix them with "statetable." (["statetable.core", "statetable.core.state_machine", ...])
statetable_sub_packages = [f"statetable.{pkg}" for pkg in src_sub_packages]

setup(
    name="statetable",
    version="0.1.0",
    description="Finite state machines driven by a transition table, with identified handlers and JSON snapshots",
    python_requires=">=3.10",
    # Step 3: main package "statetable" plus the prefixed sub packages
    packages=["statetable"] + statetable_sub_packages,
    # Every "statetable.*" package lives under src (statetable.core -> src/core)
    package_dir={"statetable": "src"},
    install_requires=[
        "loguru>=0.7",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
