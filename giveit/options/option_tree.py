"""
Option Tree - Buyer and recipient option namespaces

Holds options per audience, keyed by option id in insertion order, and
enforces that an id is used at most once per audience. Recipients never pay,
so recipient options are passed through strip_recipient_prices first.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging

from ..errors import DuplicateOptionError
from ..schema.models import Audience, Option

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceWarning:
    """A non-zero price removed from a recipient option"""
    option_id: str
    price: float

    @property
    def message(self) -> str:
        return f"removing non-zero price ({self.price}) from recipient option ({self.option_id})"


def strip_recipient_prices(
    option: Option,
    on_warning: Optional[Callable[[PriceWarning], None]] = None,
) -> Option:
    """
    Remove non-zero prices from an option and all of its nested choices

    Walks the tree depth-first, pre-order, so warnings are emitted for a node
    before any of its choices. Non-zero prices are removed with a warning;
    zero or absent prices are left as they are. The input tree is never modified.

    Args:
        option: Root of the option tree
        on_warning: Called once per removed non-zero price

    Returns:
        A new option tree without non-zero prices
    """
    stripped = option

    if option.price is not None and option.price != 0:
        warning = PriceWarning(option_id=option.id, price=option.price)
        logger.warning(warning.message)
        if on_warning:
            on_warning(warning)
        stripped = option.without_price()

    if option.choices:
        stripped = stripped.with_choices(
            strip_recipient_prices(choice, on_warning) for choice in option.choices
        )

    return stripped


class OptionTree:
    """
    Options for both audiences

    Usage:
    ```python
    tree = OptionTree()
    tree.add_option(Audience.BUYER, Option(id="size", choices=[...]))
    tree.get(Audience.BUYER, "size")
    ```
    """

    def __init__(self):
        self._options: Dict[Audience, Dict[str, Option]] = {
            Audience.BUYER: {},
            Audience.RECIPIENT: {},
        }

    def add_option(
        self,
        audience: Union[Audience, str],
        option: Union[Option, Iterable[Option]],
    ) -> List[Option]:
        """
        Add one option, or each option of a sequence independently

        A sequence is not atomic: every option is attempted, the ones with
        a fresh id are kept, and the first duplicate is raised afterwards.
        Use add_options to get every duplicate back instead.

        Returns:
            The options that were added

        Raises:
            DuplicateOptionError: the (audience, id) pair already exists
            TypeError: ``option`` is neither an Option nor a sequence of them
        """
        audience = Audience(audience)

        if isinstance(option, (str, bytes, Mapping)):
            raise TypeError(f"Expected an Option or a sequence of options, got {type(option).__name__}")

        if not isinstance(option, Option):
            added, duplicates = self.add_options(audience, option)
            if duplicates:
                raise duplicates[0]
            return added

        namespace = self._options[audience]
        if option.id in namespace:
            raise DuplicateOptionError(audience.value, option.id)

        namespace[option.id] = option
        logger.debug(f"Added {audience.value} option {option.id}")
        return [option]

    def add_options(
        self,
        audience: Union[Audience, str],
        options: Iterable[Option],
    ) -> Tuple[List[Option], List[DuplicateOptionError]]:
        """Add each option independently, collecting duplicates instead of raising"""
        added: List[Option] = []
        duplicates: List[DuplicateOptionError] = []

        for option in options:
            try:
                added.extend(self.add_option(audience, option))
            except DuplicateOptionError as e:
                logger.info(f"Skipping option: {e.message}")
                duplicates.append(e)

        return added, duplicates

    def get(self, audience: Union[Audience, str], option_id: str) -> Optional[Option]:
        return self._options[Audience(audience)].get(option_id)

    def options(self, audience: Union[Audience, str]) -> List[Option]:
        """Options of an audience in insertion order"""
        return list(self._options[Audience(audience)].values())

    def __contains__(self, key) -> bool:
        audience, option_id = key
        return option_id in self._options[Audience(audience)]

    def __len__(self) -> int:
        return sum(len(namespace) for namespace in self._options.values())

    def to_dict(self) -> Dict[str, Dict[str, dict]]:
        """
        Serialize to ``{audience: {id: option}}``

        Audiences without options are left out.
        """
        return {
            audience.value: {option_id: option.to_dict() for option_id, option in namespace.items()}
            for audience, namespace in self._options.items()
            if namespace
        }
