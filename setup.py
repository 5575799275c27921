from setuptools import setup, find_namespace_packages

about = {}
with open("qmkviewer/_version.py") as version_file:
    exec(version_file.read(), about)
    
def readme():
    with open('README.rst') as readme_file:
        return readme_file.read()

setup(name='QmkViewer',
      version=about["__version__"],
      description='Live keymap viewer for QMK keyboards',
      long_description=readme(),
      keywords='qmk keymap keyboard viewer planck',
      author='QmkViewer developers',
      packages=find_namespace_packages(include=["qmkviewer*"]),
      python_requires='>=3.10',
      install_requires=[
          'PyQt5',
          'hid',
          'pyserial',
          'PyYAML',
          'platformdirs',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'gui_scripts': ['qmkviewer=qmkviewer.main_app:main'],
      })
