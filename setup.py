from setuptools import setup, find_packages

setup(
    name="azure-audit-exporter",
    version="0.3.0",
    description="Prometheus exporter for Azure subscription audit facts",
    author="Azure Audit Exporter Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        # CLI
        "click>=8.1.7",
        "rich>=13.7.0",
        "python-dotenv>=1.0.0",

        # Exposition
        "aiohttp>=3.9.1",
        "prometheus-client>=0.19.0",

        # Cloud SDKs - Azure
        "azure-core>=1.29.0",
        "azure-identity>=1.15.0",
        "azure-mgmt-resource>=23.0.0,<25",
        "azure-mgmt-security>=5.0.0",
        "azure-mgmt-advisor>=9.0.0",

        # Data Processing
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "azure-audit-exporter=azure_audit_exporter.main:main",
        ],
    },
)
