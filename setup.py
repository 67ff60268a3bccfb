from setuptools import find_namespace_packages, setup

setup(
    name="subtrans-backend",
    version="0.1.0",
    packages=find_namespace_packages(include=["models*", "services*", "shared*"]),
    py_modules=["app", "database", "bootloader"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "python-multipart>=0.0.9",
        "pydantic>=2.5",
        "sqlalchemy>=2.0",
        "alembic>=1.13",
        "python-dotenv>=1.0",
        "pyyaml>=6.0",
        "bcrypt>=4.0",
        "python-jose[cryptography]>=3.3",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "httpx>=0.27",
        ],
    },
    include_package_data=True,
    description="Backend package for Subtrans (subtitle upload, translation and export)",
)
