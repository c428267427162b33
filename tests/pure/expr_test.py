import unittest

from debruijn.pure.expr import Abstraction, Application, Slot, Variable


class EqualityTestCase(unittest.TestCase):

    def test_eq(self):
        self.assertEqual(Abstraction("a", Variable(0)), Abstraction("b", Variable(0)))
        self.assertEqual(Application(Variable(1), Variable(0)), Application(Variable(1), Variable(0)))

        should_differ = [
            (Abstraction("a", Variable(0)), Abstraction("a", Variable(1))),
            (Variable(0), Abstraction("a", Variable(0))),
            (Application(Variable(0), Variable(1)), Application(Variable(1), Variable(0))),
            (Variable(0), 0),
        ]
        for left, right in should_differ:
            self.assertNotEqual(left, right, (left, right))

    def test_repr(self):
        expr = Abstraction("x", Application(Variable(0), Variable(1)))
        self.assertEqual("Abstraction('x', Application(Variable(0), Variable(1)))", repr(expr))

    def test_copy(self):
        expr = Abstraction("x", Application(Variable(0), Variable(1)))
        copied = expr.copy()
        self.assertEqual(expr, copied)

        copied.body.fun.index = 5
        self.assertEqual(0, expr.body.fun.index)
        self.assertEqual("x", copied.param)


class ShiftTestCase(unittest.TestCase):

    def test_shifted(self):
        expr = Abstraction("x", Application(Variable(0), Variable(1)))
        shifted = expr.shifted(0, 2)

        self.assertEqual(Abstraction("x", Application(Variable(0), Variable(3))), shifted)
        self.assertEqual(Abstraction("x", Application(Variable(0), Variable(1))), expr)

    def test_shift(self):
        cases = [
            (Variable(3), 2, 1, Variable(4)),
            (Variable(1), 2, 1, Variable(1)),
            (Application(Variable(0), Variable(2)), 1, 3, Application(Variable(0), Variable(5))),
            (Abstraction("x", Application(Variable(0), Variable(1))), 1, 1,
             Abstraction("x", Application(Variable(0), Variable(1)))),
        ]
        for expr, start, count, expected in cases:
            expr.shift(start, count)
            self.assertEqual(expected, expr)

    def test_try_unshift(self):
        cases = [
            (Variable(0), 1, 2, Variable(0)),
            (Variable(3), 1, 2, Variable(1)),
            (Application(Variable(0), Variable(3)), 1, 2, Application(Variable(0), Variable(1))),
            (Abstraction("x", Application(Variable(0), Variable(2))), 0, 1,
             Abstraction("x", Application(Variable(0), Variable(1)))),
        ]
        for expr, start, count, expected in cases:
            self.assertTrue(expr.try_unshift(start, count), expected)
            self.assertEqual(expected, expr)

    def test_try_unshift_fails(self):
        cases = [
            (Variable(1), 1, 1),
            (Variable(2), 1, 2),
            (Abstraction("x", Variable(1)), 0, 1),
            # fun is unshifted before arg fails, and must be restored
            (Application(Variable(2), Variable(1)), 1, 1),
            (Application(Abstraction("y", Application(Variable(3), Variable(0))), Variable(0)), 0, 1),
        ]
        for expr, start, count in cases:
            original = expr.copy()
            self.assertFalse(expr.try_unshift(start, count), repr(original))
            self.assertEqual(original, expr)


class SubstituteTestCase(unittest.TestCase):

    def test_substitute_variable(self):
        slot = Slot(Variable(5))
        self.assertEqual(Variable(5), Variable(0).substitute(0, slot, False))
        self.assertFalse(slot.empty)

        value = Variable(5)
        slot = Slot(value)
        self.assertIs(value, Variable(0).substitute(0, slot, True))
        self.assertTrue(slot.empty)

    def test_substitute_adjusts_indices(self):
        cases = [
            (Variable(3), 1, Variable(2)),
            (Variable(0), 1, Variable(0)),
            (Variable(1), 1, Variable(7)),  # the value is shifted by idx
        ]
        for expr, idx, expected in cases:
            self.assertEqual(expected, expr.substitute(idx, Slot(Variable(6)), True), repr(expr))

    def test_substitute_under_binder(self):
        expr = Abstraction("y", Application(Variable(1), Variable(0)))
        result = expr.substitute(0, Slot(Variable(2)), False)
        self.assertEqual(Abstraction("y", Application(Variable(3), Variable(0))), result)

    def test_application_takes_when_arg_is_independent(self):
        slot = Slot(Variable(7))
        result = Application(Variable(0), Variable(3)).substitute(0, slot, True)

        self.assertEqual(Application(Variable(7), Variable(2)), result)
        self.assertTrue(slot.empty)

    def test_take_and_copy_agree(self):
        body = Abstraction("y", Application(Application(Variable(1), Variable(0)), Variable(1)))
        value = Abstraction("z", Application(Variable(0), Variable(1)))
        expected = Abstraction("y", Application(
            Application(Abstraction("z", Application(Variable(0), Variable(2))), Variable(0)),
            Abstraction("z", Application(Variable(0), Variable(2)))))

        take_slot = Slot(value.copy())
        copy_slot = Slot(value.copy())
        taken = body.copy().substitute(0, take_slot, True)
        copied = body.copy().substitute(0, copy_slot, False)

        self.assertEqual(expected, taken)
        self.assertEqual(expected, copied)
        self.assertTrue(take_slot.empty)
        self.assertEqual(value, copy_slot.expr)

    def test_taken_value_is_used_once(self):
        value = Abstraction("z", Variable(0))
        result = Application(Variable(0), Variable(0)).substitute(0, Slot(value), True)

        self.assertEqual(Application(value, value), result)
        self.assertIsNot(result.fun, result.arg)
        self.assertIs(value, result.arg)


class RedexTestCase(unittest.TestCase):

    def test_try_beta_reduce(self):
        identity = Abstraction("x", Variable(0))
        redex = Application(identity, Abstraction("y", Variable(0)))
        self.assertEqual(Abstraction("y", Variable(0)), redex.try_beta_reduce())
        self.assertIsNone(Application(Variable(0), Variable(0)).try_beta_reduce())

        const = Abstraction("x", Abstraction("y", Variable(1)))
        self.assertEqual(Abstraction("y", Variable(1)), Application(const, Variable(0)).try_beta_reduce())

    def test_try_eta_reduce(self):
        self.assertEqual(Variable(0), Abstraction("x", Application(Variable(1), Variable(0))).try_eta_reduce())

        should_fail = [
            Abstraction("x", Application(Variable(0), Variable(0))),
            Abstraction("x", Application(Variable(1), Variable(1))),
            Abstraction("x", Application(Application(Variable(0), Variable(1)), Variable(0))),
            Abstraction("x", Variable(0)),
            Abstraction("x", Abstraction("y", Application(Variable(1), Variable(0)))),
        ]
        for case in should_fail:
            original = case.copy()
            self.assertIsNone(case.try_eta_reduce(), repr(case))
            self.assertEqual(original, case)


if __name__ == '__main__':
    unittest.main()
