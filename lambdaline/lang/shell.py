"""Handles interactive/command-line mode for lambdaline. Uses cmd as backend."""

import cmd

from lambdaline.lang.error import ParseError


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "λ "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "λ "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary lambdaline line. A line that ends too early is continued on the next input line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            source = self._tmp_line + line

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            try:
                outcome = self.sess.add(source, self.line_num)
            except ParseError as error:
                if not error.at_end_of_input:
                    raise
                self._tmp_line = source + " "
                self.prompt = self.secondary_prompt
                return

            if outcome.value is not None:
                print(self.sess.pop().line)

    def do_env(self, arg):
        """Lists named functions in the current session."""
        for line in self.sess.environment.values():
            print(line)

    def do_trace(self, arg):
        """Toggles printing of every beta reduction."""
        self.sess.trace = not self.sess.trace
        print(f"trace {'on' if self.sess.trace else 'off'}")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lambdaline interpreter!\n\n"
              "Lambda calculus is a Turing-complete language created by Alonzo Church. This \n"
              "interpreter supports pure lambda calculus with single-character variables, \n"
              "curried functions (λxy.x is λx.λy.x), and named functions.\n\n"
              "Try it out by typing 'I := λx.x'. This will bind the lambda term 'λx.x' to a \n"
              "name 'I'. Next, try typing 'I y'. This will apply 'I' to 'y', giving 'y' as \n"
              "the result.\n\n"
              "Commands: 'env' lists named functions, 'trace' toggles printing of each \n"
              "reduction step, 'exit' quits.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
