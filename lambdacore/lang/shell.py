"""Handles interactive/command-line mode for lambdacore. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: normal-order reduction\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Beta-reduces an arbitrary λ-term and prints its normal form."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self.sess.add(line, self.line_num):
                return  # if line is empty, do nothing

            for outcome in self.sess.run():
                if outcome.ok:
                    print(outcome.output, file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lambdacore interpreter!\n\n"
              "Every line you type is parsed as a pure λ-term and reduced to beta normal form\n"
              "using normal order (leftmost-outermost redex first). Write '\\' or 'λ' for lambda;\n"
              "the body of an abstraction extends as far right as possible, and application\n"
              "associates to the left.\n\n"
              "Try it out by typing '(\\x x) y'. This will apply the identity function to 'y',\n"
              "giving 'y' as the result. Terms without a normal form, such as\n"
              "'(\\x x x) (\\x x x)', give up after a fixed number of steps.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")  # a λ-term that applies a variable named exit
        return True
