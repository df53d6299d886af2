from setuptools import setup, find_packages


setup(name='rotkit',
      version='1.0.0',
      description='Active and passive 3D rotation representations with consistent conversion and composition',
      packages=find_packages(include=['rotkit', 'rotkit.*']),
      python_requires='>=3.11',
      install_requires=['numpy', 'pandas'],
      extras_require={'test': ['pytest']})
