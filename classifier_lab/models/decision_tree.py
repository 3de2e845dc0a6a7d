"""Binary decision tree classifier split on Gini impurity."""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Union
from loguru import logger

from ..data import ClassificationDataset, DataTuple
from .base import BaseClassifier, ModelFactory, UntrainedModelError, count_values, first_argmax

# Label of a leaf grown from an empty partition
EMPTY_LEAF_LABEL = 1


@dataclass(frozen=True)
class Leaf:
    label: int


@dataclass(frozen=True)
class Decision:
    """Routes on ``feature_index``: value 0 goes left, anything else right."""
    feature_index: int
    left: 'Node'
    right: 'Node'


Node = Union[Leaf, Decision]


def gini_impurity(data: Sequence[DataTuple], feature_index: int) -> float:
    """
    Size-weighted Gini impurity of grouping ``data`` by one feature's values.

    Each group contributes (|group| / |data|) * (1 - sum of squared label
    fractions within the group).
    """
    groups: Dict[int, List[int]] = {}
    for t in data:
        groups.setdefault(t.features[feature_index], []).append(t.target)

    impurity = 0.0
    for labels in groups.values():
        size = len(labels)
        group_impurity = 1.0
        for count in count_values(labels).values():
            fraction = count / size
            group_impurity -= fraction * fraction
        impurity += (size / len(data)) * group_impurity
    return impurity


class DecisionTreeClassifier(BaseClassifier):
    """
    Decision tree over binary (zero / non-zero) features.

    The tree is grown until every partition is pure or all features have
    been used on the path. A feature is never reused along one root-to-leaf
    path, but sibling branches may each use it.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.root: Optional[Node] = None

    def name(self) -> str:
        return "Decision Tree"

    def train(self, dataset: ClassificationDataset) -> None:
        self.root = self._build(list(dataset.training_data), frozenset())
        self.fitted = True
        logger.info(f"{self.model_name} trained: {self.n_nodes()} nodes, depth {self.depth()}")

    def _build(self, data: List[DataTuple], used: FrozenSet[int]) -> Node:
        if not data:
            return Leaf(EMPTY_LEAF_LABEL)

        first_label = data[0].target
        if all(t.target == first_label for t in data):
            return Leaf(first_label)

        feature_index = self._best_split(data, used)
        if feature_index is None:
            return Leaf(first_argmax(count_values(t.target for t in data)))

        left = [t for t in data if t.features[feature_index] == 0]
        right = [t for t in data if t.features[feature_index] != 0]
        branch_used = used | {feature_index}
        return Decision(
            feature_index=feature_index,
            left=self._build(left, branch_used),
            right=self._build(right, branch_used)
        )

    @staticmethod
    def _best_split(data: List[DataTuple], used: FrozenSet[int]) -> Optional[int]:
        """Unused feature with the lowest Gini impurity; lower index wins ties."""
        best_index, best_impurity = None, None
        for feature_index in range(data[0].n_features):
            if feature_index in used:
                continue
            impurity = gini_impurity(data, feature_index)
            if best_impurity is None or impurity < best_impurity:
                best_index, best_impurity = feature_index, impurity
        return best_index

    def classify_features(self, features: Sequence[int]) -> int:
        if self.root is None:
            raise UntrainedModelError(self.model_name)

        node = self.root
        while isinstance(node, Decision):
            node = node.left if features[node.feature_index] == 0 else node.right
        return node.label

    # ------------------------------------------------------------------
    # Tree inspection
    # ------------------------------------------------------------------

    def _nodes(self) -> List[Node]:
        if self.root is None:
            return []

        nodes, stack = [], [self.root]
        while stack:
            node = stack.pop()
            nodes.append(node)
            if isinstance(node, Decision):
                stack.extend((node.right, node.left))
        return nodes

    def n_nodes(self) -> int:
        return len(self._nodes())

    def n_leaves(self) -> int:
        return sum(1 for node in self._nodes() if isinstance(node, Leaf))

    def depth(self) -> int:
        """Number of decision nodes on the longest root-to-leaf path."""
        def _depth(node: Node) -> int:
            if isinstance(node, Leaf):
                return 0
            return 1 + max(_depth(node.left), _depth(node.right))

        return _depth(self.root) if self.root is not None else 0

    def export_text(self) -> str:
        """
        Render the trained tree as indented text.

        Example:
            feature[0] == 0
              leaf: 0
            feature[0] != 0
              leaf: 1
        """
        if self.root is None:
            raise UntrainedModelError(self.model_name)

        lines = []

        def _render(node: Node, indent: int) -> None:
            pad = "  " * indent
            if isinstance(node, Leaf):
                lines.append(f"{pad}leaf: {node.label}")
                return
            lines.append(f"{pad}feature[{node.feature_index}] == 0")
            _render(node.left, indent + 1)
            lines.append(f"{pad}feature[{node.feature_index}] != 0")
            _render(node.right, indent + 1)

        _render(self.root, 0)
        return "\n".join(lines)

    def count_parameters(self) -> int:
        return self.n_nodes()


ModelFactory.register_model('decision_tree', DecisionTreeClassifier)
