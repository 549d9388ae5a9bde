[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "secure-email-validator"
version = "1.0.0"
description = "Check that an e-mail address is well formed and that its domain supports secure mail delivery (MX, DNSSEC, STARTTLS)"
requires-python = ">=3.10"
keywords = ["email", "validation", "mx", "dnssec", "starttls", "smtp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Email",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Security",
]
dependencies = [
    "dnspython",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
secure-email-validator = "secure_email_validator.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["secure_email_validator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
