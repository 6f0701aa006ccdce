from setuptools import setup, find_namespace_packages
from pathlib import Path

ROOT = Path(__file__).resolve().parent

try:
    with open(ROOT / 'README.md', 'r') as readme:
        long_description = readme.read()
except OSError:
    long_description = ''

exec(open(ROOT / 'shallowtee/core/_version.py').read())

setup(
    name='shallowtee',
    version=__version__,
    description='A seekable tee-reader that mirrors every newly reached byte of its source into a sink',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='',
    author_email='',
    url='',
    license='',
    python_requires='>=3.11',
    install_requires=["pydantic>=1.10.8,~=1.10", "python-dotenv", "typing_extensions"],
    extras_require={
        'test': ['pytest'],
    },
    packages=find_namespace_packages(include=['shallowtee', 'shallowtee.*'], exclude=['shallowtee.test', 'shallowtee.test.*'])
)
