"""Interactive front end for lc. Lines go to a command-line Session, which keeps track of unfinished terms."""

import cmd

from debruijn.lang.error import GenericException


class Shell(cmd.Cmd):
    """Reads λ-terms at a prompt and reduces them one at a time.

    While the session holds a term with open parentheses, the prompt switches to CONTINUATION_PROMPT and every line,
    command names included, is taken as more of that term.
    """
    intro = "De Bruijn λ-calculus reducer\nType a term to reduce it, or 'help' for more information."
    PROMPT = "λ> "
    CONTINUATION_PROMPT = ".. "

    def __init__(self, sess, **kwargs):
        super().__init__(**kwargs)
        self.sess = sess

    @property
    def prompt(self):
        return self.CONTINUATION_PROMPT if self.sess.pending else self.PROMPT

    def parseline(self, line):
        if self.sess.pending and line != "EOF":  # Ctrl-D still quits
            return None, None, line
        return super().parseline(line)

    def default(self, line):
        with self.sess.error_handler:  # cmd.Cmd would end the loop on an exception
            self.sess.feed(line)

    def emptyline(self):
        """Blank lines only matter inside an unfinished term."""
        return self.default("")

    def do_limit(self, arg):
        """limit [N]: shows the step limit per term, or sets it to N."""
        with self.sess.error_handler:
            if arg:
                if not arg.isdecimal():
                    raise GenericException("step limit must be a non-negative integer, got '{}'", arg,
                                           diagnosis=False)
                self.sess.limit = int(arg)
            print(f"step limit: {self.sess.limit}")

    def do_help(self, arg):
        print("Type a λ-term to reduce it, e.g. '(λx.x) λy.y'. '\\' may be used instead of 'λ',\n"
              "and 'λx y.x' is short for 'λx.λy.x'. A term with open parentheses continues on the\n"
              f"next line. Terms are reduced by β- and η-reduction for at most {self.sess.limit} steps;\n"
              "'limit N' changes that. Type 'exit' or press Ctrl-D to quit.")

    def do_exit(self, arg):
        return True

    def do_EOF(self, arg):
        self.sess.pending = ""  # an unfinished term is dropped
        print()
        return True
