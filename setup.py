from setuptools import setup, find_packages
import os
from glob import glob

package_name = 'limelight_targeting'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'test.*']),
    data_files=[
        # Config files
        (os.path.join('share', package_name, 'config'),
            glob('config/*.yaml')),
    ],
    install_requires=[
        'setuptools',
        'numpy',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    maintainer='Your Name',
    maintainer_email='your.email@example.com',
    description='Limelight targeting: pipeline control, AprilTag and ball targeting',
    license='Apache-2.0',
    entry_points={
        'console_scripts': [
            'limelight_check = limelight_targeting.nodes.limelight_check:main',
        ],
    },
)
