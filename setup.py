from setuptools import setup, find_packages

setup(
    name="winnet",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "click",
        "toml",
        "wmi; sys_platform == 'win32'",
        "pywin32; sys_platform == 'win32'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "winnet=winnet.cli:cli",
        ],
    },
    python_requires=">=3.10",
    author="WinNet Contributors",
    description="Windows network administration helpers (netsh, net, WMI)",
    long_description="Adapter, IP/DNS, firewall and SMB share/session management for Windows, built on netsh, net and WMI.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Win32 (MS Windows)",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Microsoft :: Windows",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
        "Topic :: System :: Systems Administration",
    ],
)
