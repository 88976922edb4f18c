from __future__ import annotations

from setuptools import find_namespace_packages, setup

setup(
    name="my-list-service",
    version="0.1.0",
    # Repo convention: backend code lives under `backend/`, and layer packages
    # are imported top-level (`import domain`, `import server`, ...).
    package_dir={"": "backend"},
    packages=find_namespace_packages(
        where="backend",
        include=[
            "domain",
            "domain.*",
            "application",
            "application.*",
            "infrastructure",
            "infrastructure.*",
            "server",
            "server.*",
            "config",
            "config.*",
        ],
    ),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.6,<3",
        "python-dotenv>=1.0",
        "asyncpg>=0.29",
    ],
    extras_require={
        # TestClient runs on httpx.
        "test": ["httpx>=0.27"],
    },
)
