import unittest
from itertools import islice

from lambdaline.pure.binder import Binder, bind
from lambdaline.pure.ir import Application, BindingIds, Bound, Function, Unbound
from lambdaline.pure.parser import parse
from lambdaline.pure.printer import ALPHABET, Names, display_names, render, subscript


class RenderTestCase(unittest.TestCase):

    def test_round_trip(self):
        should_pass = ["λx.x", "(λx.x)y", "λxy.x", "λx.(xy)", "x(yz)", "f(λx.x)", "(λx.x)(λx.x)", "λfx.(f(fx))"]
        for source in should_pass:
            self.assertEqual(source, render(bind(parse(source))), source)

    def test_render(self):
        cases = {
            "λx.λy.x": "λxy.x",
            "x y z": "(xy)z",
            "λx.x y": "λx.(xy)",
            "f λx.x": "f(λx.x)",
            "(λx.x) (λy.y) z": "((λx.x)(λy.y))z",
            "λx.(λy.y) x": "λx.((λy.y)x)",
            "λx.λx.x": "λxa.a",
            "λx.λx.λx.x": "λxab.b",
            "λa.b (λb.b)": "λa.(b(λc.c))",
            "λx.(λx.x) x": "λx.((λa.a)x)",
        }
        for source, expected in cases.items():
            self.assertEqual(expected, render(bind(parse(source))), source)

    def test_alpha_equivalence(self):
        # binding ids never show up in the output
        for source in ["λx.x", "λy.y", "λxy.(yx)"]:
            first = render(Binder(BindingIds()).bind(parse(source)))
            second = render(Binder(BindingIds([41])).bind(parse(source)))
            self.assertEqual(source, first)
            self.assertEqual(first, second)

    def test_repeated_renders(self):
        term = bind(parse("λx.(λx.x)(λy.x)"))
        self.assertEqual(render(term), render(term))

    def test_free_names_reserved(self):
        cases = {
            Function(Bound(1, "y"), Unbound("y")): "λa.y",
            Function(Bound(1, "a"), Application(Unbound("a"), Bound(1, "a"))): "λb.(ab)",
            Application(Bound(3, "x"), Unbound("x")): "ax",
            Bound(3, "x"): "x",
            Function(Unbound("x"), Unbound("x")): "λx.x",
        }
        for term, expected in cases.items():
            self.assertEqual(expected, render(term), term)


class NamesTestCase(unittest.TestCase):

    def test_display_names(self):
        self.assertEqual(["a", "b", "c"], list(islice(display_names(), 3)))
        self.assertNotIn("λ", ALPHABET)
        self.assertEqual(len(ALPHABET), len(set(ALPHABET)))

        names = list(islice(display_names(), len(ALPHABET) + 2))
        self.assertEqual([subscript("a", 1), subscript("b", 1)], names[-2:])
        self.assertEqual("a₁₂", subscript("a", 12))

    def test_claim(self):
        names = Names({"y"})
        self.assertEqual("x", names.claim(1, "x"))
        self.assertEqual("x", names.claim(1, "x"))
        self.assertEqual("a", names.claim(2, "x"))
        self.assertEqual("b", names.claim(3, "y"))

        names.release(1)
        self.assertEqual("x", names.claim(4, "x"))

    def test_claim_exhausted(self):
        names = Names(set(ALPHABET))
        self.assertEqual("a₁", names.claim(1, "x"))


if __name__ == '__main__':
    unittest.main()
