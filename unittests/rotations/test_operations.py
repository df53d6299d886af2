from unittest import TestCase

import itertools

from datetime import datetime

import numpy as np

import pandas as pd

from rotkit import rotations as rt


REPRESENTATIONS = [rt.RotationQuaternion, rt.RotationMatrix, rt.AngleAxis, rt.RotationVector,
                   rt.EulerAnglesZyx, rt.EulerAnglesXyz]

AXES = {'x': np.array([1., 0, 0]), 'y': np.array([0, 1., 0]), 'z': np.array([0, 0, 1.])}


def _unit(values):
    values = np.asarray(values, dtype=np.float64)
    return values / np.linalg.norm(values)


def _quarter(axis):
    return np.concatenate([[np.cos(np.pi/4)], np.sin(np.pi/4)*AXES[axis]])


GENERAL_1 = _unit([0.3, -0.5, 0.6, 0.2])
GENERAL_2 = _unit([-0.7, 0.1, 0.2, -0.4])


class TestComposition(TestCase):

    def test_identity(self):

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                with self.subTest(representation=representation.__name__, usage=usage):

                    rotation = representation.from_quaternion_array(GENERAL_1, usage)
                    identity = representation.identity(usage)

                    self.assertTrue((identity * rotation).is_near(rotation))
                    self.assertTrue((rotation * identity).is_near(rotation))

    def test_quarter_turns(self):

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                for axis in AXES:
                    with self.subTest(representation=representation.__name__, usage=usage, axis=axis):

                        quarter = representation.from_quaternion_array(_quarter(axis), usage)

                        full = quarter * quarter * quarter * quarter

                        self.assertIsInstance(full, representation)
                        self.assertTrue(full.is_near(representation.identity(usage)))

                        half = quarter * quarter

                        self.assertFalse(half.is_near(representation.identity(usage)))

    def test_conjugation(self):

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                for first, second, third in (('x', 'y', 'z'), ('y', 'z', 'x'), ('z', 'x', 'y')):
                    with self.subTest(representation=representation.__name__, usage=usage,
                                      axes=(first, second, third)):

                        a = representation.from_quaternion_array(_quarter(first), usage)
                        b = representation.from_quaternion_array(_quarter(second), usage)
                        c = representation.from_quaternion_array(_quarter(third), usage)

                        if usage is rt.Usage.ACTIVE:
                            self.assertTrue((a.inverted() * b * a).is_near(c.inverted()))
                            self.assertTrue((a * b * a.inverted()).is_near(c))
                        else:
                            self.assertTrue((a.inverted() * b * a).is_near(c))
                            self.assertTrue((a * b * a.inverted()).is_near(c.inverted()))

    def test_mixed_conjugation(self):

        for dtype, representations, tol in ((np.float64, REPRESENTATIONS, 1e-6), (np.float32, REPRESENTATIONS[:4], 1e-5)):
            for outer, inner in itertools.product(representations, repeat=2):
                for usage in rt.Usage:
                    for first, second, third in (('x', 'y', 'z'), ('y', 'z', 'x'), ('z', 'x', 'y')):
                        with self.subTest(outer=outer.__name__, inner=inner.__name__, usage=usage, dtype=dtype,
                                          axes=(first, second, third)):

                            a = outer.from_quaternion_array(_quarter(first), usage, dtype)
                            b = inner.from_quaternion_array(_quarter(second), usage, dtype)
                            c = inner.from_quaternion_array(_quarter(third), usage, dtype)

                            conjugated = a.inverted() * b * a
                            reversed_conjugated = a * b * a.inverted()

                            self.assertIsInstance(conjugated, outer)

                            if usage is rt.Usage.ACTIVE:
                                self.assertTrue(conjugated.is_near(c.inverted(), tol=tol))
                                self.assertTrue(reversed_conjugated.is_near(c, tol=tol))
                            else:
                                self.assertTrue(conjugated.is_near(c, tol=tol))
                                self.assertTrue(reversed_conjugated.is_near(c.inverted(), tol=tol))

    def test_repeated_single_precision(self):

        for usage in rt.Usage:
            for other_type in (rt.RotationMatrix, rt.RotationQuaternion):
                with self.subTest(usage=usage, other=other_type.__name__):

                    step = rt.RotationVector(0.3, -0.2, 0.5, usage=usage, dtype=np.float32)

                    accumulated = rt.RotationMatrix.from_rotation(step)
                    other = other_type.from_rotation(step)

                    reference = rt.RotationMatrix.from_rotation(step, dtype=np.float64)
                    reference_step = reference

                    for _ in range(600):
                        accumulated = accumulated * other
                        reference = reference * reference_step

                    matrix = accumulated.matrix

                    self.assertEqual(matrix.dtype, np.float32)
                    self.assertLessEqual(np.abs(matrix @ matrix.T - np.eye(3)).max(),
                                         rt.get_rotation_options().orthonormality_tolerance)
                    np.testing.assert_allclose(matrix, reference.matrix, atol=1e-3)

                    inverted = accumulated.inverted()

                    self.assertTrue((inverted * accumulated).is_near(rt.RotationMatrix.identity(usage, np.float32),
                                                                     tol=1e-5))

    def test_matches_matrix_product(self):

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                with self.subTest(representation=representation.__name__, usage=usage):

                    a = representation.from_quaternion_array(GENERAL_1, usage)
                    b = representation.from_quaternion_array(GENERAL_2, usage)

                    expected = (rt.RotationMatrix.from_rotation(a).matrix @
                                rt.RotationMatrix.from_rotation(b).matrix)

                    np.testing.assert_array_almost_equal(rt.RotationMatrix.from_rotation(a * b).matrix, expected)

                    self.assertTrue(a.compose(b).is_near(a * b))

    def test_mixed_representations(self):

        for usage in rt.Usage:
            with self.subTest(usage=usage):

                matrix = rt.RotationMatrix.from_quaternion_array(GENERAL_1, usage)
                quaternion = rt.RotationQuaternion(GENERAL_2, usage=usage)

                result = matrix * quaternion

                self.assertIsInstance(result, rt.RotationMatrix)
                self.assertTrue(result.is_near(rt.RotationQuaternion(GENERAL_1, usage=usage) * quaternion))

                result = quaternion * rt.AngleAxis.from_quaternion_array(GENERAL_1, usage)

                self.assertIsInstance(result, rt.RotationQuaternion)
                self.assertTrue(result.is_near(quaternion * rt.RotationQuaternion(GENERAL_1, usage=usage)))

    def test_precision(self):

        single_1 = rt.RotationQuaternion(GENERAL_1, dtype=np.float32)
        single_2 = rt.RotationQuaternion(GENERAL_2, dtype=np.float32)

        result = single_1 * single_2

        self.assertEqual(result.dtype, np.float32)
        self.assertEqual(result.to_stored_implementation().dtype, np.float32)

        expected = rt.RotationQuaternion(GENERAL_1) * rt.RotationQuaternion(GENERAL_2)

        np.testing.assert_allclose(result.to_stored_implementation(), expected.to_stored_implementation(), atol=1e-6)

    def test_mismatch(self):

        active = rt.RotationQuaternion(GENERAL_1)
        passive = rt.RotationQuaternion(GENERAL_1, usage=rt.Usage.PASSIVE)
        single = rt.RotationQuaternion(GENERAL_1, dtype=np.float32)

        with self.assertRaises(rt.UsageMismatchError):
            _ = active * passive

        with self.assertRaises(rt.UsageMismatchError):
            rt.RotationMatrix.from_rotation(active) * passive

        with self.assertRaises(rt.UsageMismatchError):
            active.is_near(passive)

        with self.assertRaises(rt.PrecisionMismatchError):
            _ = active * single

        # both are type errors
        with self.assertRaises(TypeError):
            _ = active * single

        # mixing works after an explicit cast
        self.assertEqual((active.astype(np.float32) * single).dtype, np.float32)

        with self.assertRaises(TypeError):
            _ = active * 3


class TestInverse(TestCase):

    def test_inverted(self):

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                for name, quaternion in (('general', GENERAL_1), ('half', [0, 0, 1, 0]), ('identity', [1, 0, 0, 0])):
                    with self.subTest(representation=representation.__name__, usage=usage, rotation=name):

                        rotation = representation.from_quaternion_array(quaternion, usage)

                        inverse = rotation.inverted()

                        self.assertIsInstance(inverse, representation)
                        self.assertTrue((rotation * inverse).is_near(representation.identity(usage)))
                        self.assertTrue((inverse * rotation).is_near(representation.identity(usage)))
                        self.assertTrue(inverse.inverted().is_near(rotation))

    def test_inverse_rotate(self):

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                with self.subTest(representation=representation.__name__, usage=usage):

                    rotation = representation.from_quaternion_array(GENERAL_1, usage)

                    vector = np.array([0.3, -1.2, 2])

                    np.testing.assert_array_almost_equal(rotation.inverse_rotate(rotation.rotate(vector)), vector)


class TestRotate(TestCase):

    def test_quarter_z(self):

        for representation in REPRESENTATIONS:
            with self.subTest(representation=representation.__name__):

                active = representation.from_quaternion_array(_quarter('z'), rt.Usage.ACTIVE)
                passive = representation.from_quaternion_array(_quarter('z'), rt.Usage.PASSIVE)

                np.testing.assert_array_almost_equal(active.rotate([1, 0, 0]), [0, 1, 0])
                np.testing.assert_array_almost_equal(passive.rotate([1, 0, 0]), [0, -1, 0])

    def test_composition(self):

        vector = np.array([0.3, -1.2, 2])

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                with self.subTest(representation=representation.__name__, usage=usage):

                    a = representation.from_quaternion_array(GENERAL_1, usage)
                    b = representation.from_quaternion_array(GENERAL_2, usage)

                    np.testing.assert_array_almost_equal((a * b).rotate(vector), a.rotate(b.rotate(vector)))

    def test_matrix(self):

        vector = np.array([0.3, -1.2, 2])

        for usage in rt.Usage:
            with self.subTest(usage=usage):

                quaternion = rt.RotationQuaternion(GENERAL_1, usage=usage)

                np.testing.assert_array_almost_equal(quaternion.rotate(vector),
                                                     quaternion.to(rt.RotationMatrix).matrix @ vector)

    def test_precision(self):

        rotated = rt.RotationVector(0, 0, 0.5, dtype=np.float32).rotate([1, 0, 0])

        self.assertEqual(rotated.dtype, np.float32)


class TestGetUnique(TestCase):

    def test_get_unique(self):

        samples = {'general': GENERAL_1, 'general negative': GENERAL_2, 'half y': [0, 0, 1, 0],
                   'half diagonal': -np.array([0, 1, 1, 1])/np.sqrt(3), 'identity': [1, 0, 0, 0]}

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                for name, quaternion in samples.items():
                    with self.subTest(representation=representation.__name__, usage=usage, rotation=name):

                        rotation = representation.from_quaternion_array(quaternion, usage)

                        unique = rotation.get_unique()

                        self.assertIsInstance(unique, representation)
                        self.assertTrue(unique.is_near(rotation))

                        difference = unique.get_unique().to_stored_implementation() - unique.to_stored_implementation()

                        if issubclass(representation, (rt.EulerAnglesZyx, rt.EulerAnglesXyz)):
                            # -pi and pi are the same euler angle
                            difference = np.mod(difference + np.pi, 2*np.pi) - np.pi

                        np.testing.assert_array_almost_equal(difference, np.zeros_like(difference))

    def test_euler_half_turn_range(self):

        for representation in (rt.EulerAnglesZyx, rt.EulerAnglesXyz):
            for sign in (1, -1):
                with self.subTest(representation=representation.__name__, sign=sign):

                    angles = representation(sign*np.pi, 0, 0).get_unique().angles

                    self.assertEqual(angles[0], np.pi)
                    np.testing.assert_array_equal(angles[1:], [0, 0])
                    self.assertFalse(np.signbit(angles).any())

                    angles = representation(0, 0, sign*np.pi).get_unique().angles

                    self.assertEqual(angles[2], np.pi)
                    self.assertTrue(np.all((angles > -np.pi) & (angles <= np.pi)))

    def test_equivalent_inputs(self):

        # different encodings of the same rotation have the same canonical form
        for first, second in ((rt.RotationQuaternion(GENERAL_1), rt.RotationQuaternion(-GENERAL_1)),
                              (rt.AngleAxis(0.5, 0, 0, 1), rt.AngleAxis(-0.5, 0, 0, -1)),
                              (rt.AngleAxis(0.5, 0, 0, 1), rt.AngleAxis(0.5 + 2*np.pi, 0, 0, 1)),
                              (rt.AngleAxis(np.pi, 0, 1, 0), rt.AngleAxis(np.pi, 0, -1, 0)),
                              (rt.RotationVector(0, 0, 0.5), rt.RotationVector(0, 0, 0.5 - 2*np.pi)),
                              (rt.RotationVector(np.pi, 0, 0), rt.RotationVector(-np.pi, 0, 0)),
                              (rt.EulerAnglesZyx(0.1, 0.2, 0.3), rt.EulerAnglesZyx(0.1 - 2*np.pi, 0.2, 0.3 + 2*np.pi))):
            with self.subTest(rotation=first):

                np.testing.assert_array_almost_equal(first.get_unique().to_stored_implementation(),
                                                     second.get_unique().to_stored_implementation())


class TestBoxOperators(TestCase):

    def test_box_plus_minus(self):

        perturbation = np.array([0.01, -0.02, 0.03])

        for representation in REPRESENTATIONS:
            for usage in rt.Usage:
                with self.subTest(representation=representation.__name__, usage=usage):

                    rotation = representation.from_quaternion_array(GENERAL_1, usage)

                    perturbed = rotation.box_plus(perturbation)

                    self.assertIsInstance(perturbed, representation)

                    np.testing.assert_array_almost_equal(perturbed.box_minus(rotation), perturbation)

                    expected = representation.from_quaternion_array(rt.rotvec_to_quaternion(perturbation),
                                                                    usage) * rotation

                    self.assertTrue(perturbed.is_near(expected))

                    self.assertTrue(rotation.box_plus([0, 0, 0]).is_near(rotation))

                    np.testing.assert_array_almost_equal(rotation.box_minus(rotation), [0, 0, 0])


class TestIsNear(TestCase):

    def test_is_near(self):

        self.assertTrue(rt.AngleAxis(0.1, 0, 0, 1).is_near(rt.AngleAxis(0.1 + 2*np.pi, 0, 0, 1)))

        self.assertTrue(rt.AngleAxis(0.1, 0, 0, 1).is_near(rt.RotationVector(0, 0, 0.1)))

        self.assertFalse(rt.AngleAxis(0.1, 0, 0, 1).is_near(rt.RotationVector(0, 0, 0.1 + 1e-3)))

        self.assertTrue(rt.AngleAxis(0.1, 0, 0, 1).is_near(rt.RotationVector(0, 0, 0.1 + 1e-3), tol=1e-3))

        self.assertTrue(rt.RotationMatrix(rt.rot_x(np.pi)).is_near(rt.RotationVector(-np.pi, 0, 0)))


class TestInterpolation(TestCase):

    def test_slerp(self):

        start = rt.RotationVector(0, 0, 0)
        stop = rt.RotationVector(0, 0, 1.0)

        middle = rt.slerp(start, stop, 0.5)

        self.assertIsInstance(middle, rt.RotationVector)
        np.testing.assert_array_almost_equal(middle.vector, [0, 0, 0.5])

        np.testing.assert_array_almost_equal(rt.slerp(start, stop, 0.25).vector, [0, 0, 0.25])

        middle = rt.slerp(start, stop, datetime(2020, 1, 1, 0, 0, 30), datetime(2020, 1, 1), datetime(2020, 1, 1, 0, 1))

        np.testing.assert_array_almost_equal(middle.vector, [0, 0, 0.5])

        middle = rt.slerp(start, stop, pd.Timestamp('2020-01-01T06:00'), pd.Timestamp('2020-01-01'),
                          pd.Timestamp('2020-01-02'))

        np.testing.assert_array_almost_equal(middle.vector, [0, 0, 0.25])

    def test_slerp_mixed(self):

        for usage in rt.Usage:
            with self.subTest(usage=usage):

                start = rt.RotationMatrix(np.eye(3), usage=usage)
                stop = rt.AngleAxis(2, 0, 1, 0, usage=usage)

                middle = rt.slerp(start, stop, 0.5)

                self.assertIsInstance(middle, rt.RotationMatrix)
                self.assertIs(middle.usage, usage)
                self.assertTrue(middle.is_near(rt.AngleAxis(1, 0, 1, 0, usage=usage)))

    def test_nlerp(self):

        start = rt.RotationQuaternion(1, 0, 0, 0)
        stop = rt.RotationQuaternion(0.5, 0.5, 0.5, 0.5)

        middle = rt.nlerp(start, stop, 1, 0, 2)

        self.assertIsInstance(middle, rt.RotationQuaternion)

        expected = np.array([1.5, 0.5, 0.5, 0.5])

        np.testing.assert_array_almost_equal(middle.to_stored_implementation(), expected/np.linalg.norm(expected))

        np.testing.assert_array_almost_equal(rt.nlerp(start, stop, 0).to_stored_implementation(), [1, 0, 0, 0])

    def test_mismatch(self):

        with self.assertRaises(rt.UsageMismatchError):
            rt.slerp(rt.RotationVector(0, 0, 0), rt.RotationVector(0, 0, 1, usage=rt.Usage.PASSIVE), 0.5)

        with self.assertRaises(rt.PrecisionMismatchError):
            rt.nlerp(rt.RotationVector(0, 0, 0), rt.RotationVector(0, 0, 1, dtype=np.float32), 0.5)
