from setuptools import setup

setup(name='cgview',
      description='Read-only view of the cgroup v1 placement of a process',
      version='0.1.0',
      license='GPLv2',
      packages=['cgview',
                'cgview.util',
                'cgview.cgroup'],
      python_requires='>=3.6',
      install_requires=['psutil'],
      extras_require={'test': ['pytest', 'mock']})
