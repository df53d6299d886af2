from dataclasses import dataclass, fields, replace

from typing import Any, Dict, Self

from abc import ABCMeta


@dataclass
class UserOptions(metaclass=ABCMeta):
    """
    This is an abstract class used to create a dataclass of user options.

    These options are used to set defaults for parameters that control how the routines that consume them behave.

    Example:
        :class:`.RotationOptions` contains the default numerical thresholds used by the rotation conversion routines.

    Custom objects built from this abstract class should follow the naming scheme <concern>Options.  Any checks on the
    values of the options should be placed in :meth:`override_options`, which is called every time the options are
    read through :attr:`options_dict` or copied through :meth:`updated`.

    for example:
        >>> @dataclass
        >>> class ExampleOptions(UserOptions):
        >>>     example_var : int = 1234
        >>> ExampleOptions().updated(example_var=5).options_dict
        ...     {'example_var': 5}
    """

    def override_options(self):
        '''
        This method is used for special cases when certain options should be checked or overwritten
        '''
        pass

    def updated(self, **overrides: Any) -> Self:
        """
        Return a copy of these options with the requested fields replaced.

        :param overrides: the fields to replace as keyword arguments
        :return: the updated copy of the options
        :raises TypeError: if one of the keywords is not a field of the options
        """

        new = replace(self, **overrides)
        new.override_options()
        return new

    @property
    def options_dict(self) -> Dict[str, Any]:
        """
        Determine the options input to the dataclass.

        This property method will ignore all internal properties and functions
        """

        self.override_options()
        return {field.name: getattr(self, field.name) for field in fields(self)}
