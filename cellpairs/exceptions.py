class ConfigurationError(Exception):

    def __init__(self, msg):
        self.msg = msg


class PointIndexError(IndexError):

    def __init__(self, i, num_points):
        self.msg = ("Invalid point index {!r}; expected an integer in "
                    "[0, {}).".format(i, num_points))
        super(PointIndexError, self).__init__(self.msg)


class InternalError(Exception):

    def __init__(self, msg):
        self.msg = msg
