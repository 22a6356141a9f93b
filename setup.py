import os

from setuptools import setup, find_packages

# Set up the package
setup(
    name="spectrum-analysis",
    version="0.1.0",
    author="Scott Friedman and Project Contributors",
    author_email="",
    description="Radix-2 FFT, peak detection and spectral analysis (PSD, spectrogram, cross-correlation, group delay)",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
        "pyyaml>=5.1",
    ],
    extras_require={
        "dev": ["pytest", "scipy>=1.5.0", "matplotlib"],
    },
    entry_points={
        "console_scripts": [
            "spectrum-analysis=spectrum_analysis.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
