from setuptools import setup, find_packages

setup(
    name="whitted-raytracer",
    version="1.0.0",
    description="Recursive Whitted-style ray tracer with CSG groups and bounding-box pruning",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config"],
    install_requires=[
        "numpy>=1.21.0",
        "opencv-python>=4.5.0",
        "pywavefront>=1.3.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
)
