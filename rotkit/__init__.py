# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
Welcome to rotkit

rotkit is a library of 3D rotation representations (quaternions, rotation matrices, angle-axis pairs, rotation vectors
and Euler angles) that can be built from, composed with and converted to one another consistently for active and
passive rotations in single and double precision.  Everything lives in :mod:`rotkit.rotations`.
"""

import rotkit.rotations

__version__ = '1.0.0'
