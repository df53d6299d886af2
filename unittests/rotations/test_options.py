from unittest import TestCase

import numpy as np

from rotkit import rotations as rt


class TestRotationOptions(TestCase):

    def test_defaults(self):

        options = rt.RotationOptions()

        self.assertEqual(options.options_dict, {'small_angle_threshold': 1e-6,
                                                'angle_tolerance': 1e-6,
                                                'orthonormality_tolerance': 1e-5,
                                                'unit_tolerance': 1e-6})

    def test_invalid(self):

        with self.assertRaises(ValueError):
            rt.RotationOptions(small_angle_threshold=-1)

        with self.assertRaises(ValueError):
            rt.RotationOptions().updated(angle_tolerance=0)

        with self.assertRaises(TypeError):
            rt.RotationOptions().updated(not_an_option=1)

    def test_updated(self):

        options = rt.RotationOptions()

        updated = options.updated(unit_tolerance=1e-3)

        self.assertEqual(updated.unit_tolerance, 1e-3)
        self.assertEqual(options.unit_tolerance, 1e-6)


class TestSetRotationOptions(TestCase):

    def use_options(self, options=None, **overrides):

        with self.assertLogs('rotkit.rotations.options', level='INFO'):
            previous = rt.set_rotation_options(options, **overrides)

        self.addCleanup(rt.set_rotation_options, previous)

        return previous

    def test_set_and_restore(self):

        original = rt.get_rotation_options()

        previous = self.use_options(small_angle_threshold=1e-3)

        self.assertIs(previous, original)
        self.assertEqual(rt.get_rotation_options().small_angle_threshold, 1e-3)

        # the other fields are back at their defaults
        self.assertEqual(rt.get_rotation_options().angle_tolerance, 1e-6)

        self.use_options(rt.RotationOptions(angle_tolerance=1e-2), unit_tolerance=1e-2)

        self.assertEqual(rt.get_rotation_options().angle_tolerance, 1e-2)
        self.assertEqual(rt.get_rotation_options().unit_tolerance, 1e-2)

        with self.assertRaises(ValueError):
            rt.set_rotation_options(orthonormality_tolerance=-1)

        self.assertEqual(rt.get_rotation_options().angle_tolerance, 1e-2)

    def test_angle_tolerance(self):

        angle_axis = rt.AngleAxis(np.pi - 1e-3, 0, 0, -1)

        self.assertAlmostEqual(angle_axis.get_unique().angle, np.pi - 1e-3)

        self.use_options(angle_tolerance=1e-2)

        unique = angle_axis.get_unique()

        self.assertEqual(unique.angle, np.pi)
        np.testing.assert_array_equal(unique.axis, [0, 0, 1])

    def test_orthonormality_tolerance(self):

        matrix = [[1, 1e-3, 0], [0, 1, 0], [0, 0, 1]]

        with self.assertRaises(rt.InvalidRotationError):
            rt.RotationMatrix(matrix)

        self.use_options(orthonormality_tolerance=1e-2)

        np.testing.assert_array_equal(rt.RotationMatrix(matrix).matrix, matrix)

    def test_unit_tolerance(self):

        self.use_options(unit_tolerance=0.5)

        with self.assertNoLogs('rotkit.rotations.quaternion', level='DEBUG'):
            rt.RotationQuaternion(1.1, 0, 0, 0)
