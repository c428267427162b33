"""Session control for the lc front end: reads statements from a file or the command line, parses them, and reduces
them under a step limit.

A file holds one λ-term per line. ';;' starts a comment, and a line whose parentheses are still open continues onto
the next line.
"""

from debruijn.lang.error import GenericException
from debruijn.pure.parse import parse
from debruijn.pure.reducer import NormalOrderReducer, StepLimit


class Session:
    """Governs a lc session: the pending statements and the results of running them."""
    SH_FILE = "<in>"  # command-line interpreter filename
    DEFAULT_LIMIT = 10000

    def __init__(self, error_handler, path, limit=DEFAULT_LIMIT, cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.limit = limit        # steps allowed per statement
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.to_exec = {}   # dict of line num: (source, parsed tree) to reduce
        self.results = []   # NormalOrderReducers of executed statements; only the latest one in command-line mode

        self.line_num = 0   # command-line lines read so far
        self.pending = ""   # command-line statement still waiting for its closing parentheses

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns updated
        value of line and whether the next line continues this one.
        """
        if ";;" in line:
            line = line[:line.index(";;")]  # get rid of comments
        line = line.strip()

        if exprs is not None:
            if add_to_prev and exprs:
                prev, prev_num = exprs.pop()
                line = f"{prev} {line}".strip()
                exprs.append((line, prev_num))
            elif line:
                exprs.append((line, line_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses expr and queues it. Reduction is lazy and is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised
        self.to_exec[line_num] = (expr, parse(expr))
        self.error_handler.remove_line(self.path)  # error was not raised

    def feed(self, line):
        """Takes one command-line line. A statement whose parentheses are still open is kept in self.pending and
        completed by later lines; a complete one is parsed and reduced right away.
        """
        self.line_num += 1
        line, add_to_prev = self.preprocess_line(f"{self.pending} {line}", self.line_num, False)

        self.pending = line if add_to_prev else ""  # reset before parsing so a bad statement is dropped
        if line and not add_to_prev:
            self.add(line, self.line_num)
            self.run()

    def run(self):
        """Reduces this session's queued statements and prints each result. Will raise any errors that are
        encountered.
        """
        for line_num, (expr, tree) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            reducer = NormalOrderReducer(tree)
            limit = StepLimit(self.limit)
            try:
                reduced = reducer.reduce(limit)
            finally:
                del self.to_exec[line_num]

            if self.cmd_line:
                print(f"input: {expr}")
                print(f"reduced: {reducer}" if reduced else "not reducible")
                self.results = [reducer]
            else:
                print(reducer)
                self.results.append(reducer)

            if reduced and limit.exhausted:
                self.error_handler.warn("'{}' reached the step limit of {} and may not be in normal form",
                                        (expr, str(self.limit)), diagnosis=False)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
