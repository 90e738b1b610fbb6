import re
import platform

from setuptools import find_packages, setup
from setuptools.command.bdist_wheel import get_platform, bdist_wheel as _bdist_wheel


NAME = "vkshader"
SUMMARY = "Compile GLSL shaders into SpirV at build time"

with open(f"{NAME}/_version.py") as fh:
    VERSION = re.search(r"__version__ = \"(.*?)\"", fh.read()).group(1)


class bdist_wheel(_bdist_wheel):  # noqa: N801
    def finalize_options(self):
        self.plat_name = get_platform(None)  # force a platform tag
        _bdist_wheel.finalize_options(self)


resources_globs = ["*.h"]
if platform.system() == "Linux":
    resources_globs.append("libshaderc_shared.so*")
elif platform.system() == "Darwin":
    resources_globs.append("libshaderc_shared*.dylib")
elif platform.system() == "Windows":
    resources_globs.append("shaderc_shared.dll")
else:
    pass  # don't include binaries; user will have to arrange for the lib

runtime_deps = ["cffi>=1.15.0"]
extra_deps = {
    "tests": ["pytest"],
}

setup(
    name=NAME,
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={f"{NAME}.resources": resources_globs},
    python_requires=">=3.8.0",
    install_requires=runtime_deps,
    extras_require=extra_deps,
    license="BSD 2-Clause",
    description=SUMMARY,
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    cmdclass={"bdist_wheel": bdist_wheel},
    entry_points={
        "console_scripts": [
            "vkshader = vkshader.__main__:main",
        ],
    },
)
