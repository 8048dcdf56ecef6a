"""
Longitudinal Flight Dynamics Simulator - Setup Script

Install in development mode:
    pip install -e .[test]

Then import anywhere:
    from eom.longitudinal import state_space_matrices
"""

from setuptools import setup
from pathlib import Path

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
if requirements_path.exists():
    with open(requirements_path, 'r') as f:
        install_requires = [
            line.strip() for line in f
            if line.strip() and not line.startswith('#')
        ]
else:
    install_requires = [
        'numpy>=1.24',
        'scipy>=1.10',
        'matplotlib>=3.7',
        'streamlit>=1.28',
        'plotly>=5.15',
        'pandas>=2.0',
        'pyyaml>=6.0',
    ]

setup(
    name="longitudinal-flight-sim",
    version="1.0.0",
    author="Flight Dynamics Team",
    description="Linear longitudinal aircraft dynamics with real-time Euler playback, based on Roskam",
    long_description=open("README.md", encoding="utf-8").read() if Path("README.md").exists() else "",
    long_description_content_type="text/markdown",
    # Flat layout: top-level modules plus namespace sub-packages
    py_modules=['config', 'config_loader', 'errors', 'streamlit_app'],
    packages=['aero', 'analysis', 'eom', 'sim'],
    install_requires=install_requires,
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    entry_points={
        "console_scripts": [
            "longsim-ui=streamlit_app:main",
        ],
    },
)
