import unittest

from lambdaline.lang.error import ParseError
from lambdaline.lang.lexical import EmptyStmt, ExecStmt, NamedFunc, parse_line
from lambdaline.pure.binder import bind
from lambdaline.pure.parser import Application, Function, Variable, parse

x, y, z = Variable("x"), Variable("y"), Variable("z")


class ParseLineTestCase(unittest.TestCase):

    def test_parse_line(self):
        cases = {
            "": EmptyStmt(),
            "   ": EmptyStmt(),
            "x": ExecStmt(x),
            "x y": ExecStmt(Application(x, y)),
            "x (y)": ExecStmt(Application(x, y)),
            "x λy.y": ExecStmt(Application(x, Function("y", y))),
            "λx.x": ExecStmt(Function("x", x)),
            "(x) y": ExecStmt(Application(x, y)),
            "x := y": NamedFunc("x", y),
            "I := λx.x": NamedFunc("I", Function("x", x)),
            "x:=y z": NamedFunc("x", Application(y, z)),
            "x := x": NamedFunc("x", x),
        }
        for source, expected in cases.items():
            self.assertEqual(expected, parse_line(source), source)

    def test_parse_line_error(self):
        cases = {
            "x y := z": "`)` or expression",
            "(x) := y": "`)` or expression",
            ":= x": "expression",
            "x := y := z": "`)` or expression",
            "λx.x := y": "`)` or expression",
            "x := )": "expression",
        }
        for source, expected in cases.items():
            with self.assertRaises(ParseError, msg=source) as context:
                parse_line(source)
            self.assertEqual(expected, context.exception.expected, source)
            self.assertFalse(context.exception.at_end_of_input, source)

        should_continue = ["x :=", "x := (λy.y", "(x"]
        for source in should_continue:
            with self.assertRaises(ParseError, msg=source) as context:
                parse_line(source)
            self.assertTrue(context.exception.at_end_of_input, source)

    def test_str(self):
        cases = {
            EmptyStmt(): "",
            ExecStmt(bind(parse("λx.x y"))): "λx.(xy)",
            NamedFunc("I", bind(parse("λx.x"))): "I := λx.x",
            NamedFunc("I", parse("λx.x")): "I := (λx.x)",
        }
        for line, expected in cases.items():
            self.assertEqual(expected, str(line))


if __name__ == '__main__':
    unittest.main()
