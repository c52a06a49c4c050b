""" Synthetic classification domains and the labeled patterns drawn from them

A domain maps each class label to a box in feature space, given as one
`[low, high]` pair per dimension. Patterns are sampled by picking a label
uniformly at random and drawing a point uniformly inside that label's box.

The mapping between labels and class numbers is fixed by `Domain.labels`.
Unless an explicit ordering is given, labels are sorted.
"""
from collections import namedtuple
import logging

import numpy
from sklearn.utils import check_random_state

from bpnet.core.exception import MalformedDomainError


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


Pattern = namedtuple(
    'Pattern',
    ['vector', 'class_label', 'class_number', 'class_norm'])


class Domain:
    """ A set of named, axis-aligned regions of feature space
    """

    def __init__(self, regions, labels=None):
        """ Initialize and validate a domain

        Parameters
        ----------
        regions: dict
            Maps each class label to a list of `[low, high]` bound pairs,
            one pair per feature dimension.

        labels: list, default=None
            The class ordering used to convert between labels and class
            numbers. The default (None) uses the sorted labels.

        """
        if len(regions) == 0:
            raise MalformedDomainError("Domain has no labeled regions")

        if labels is None:
            try:
                labels = sorted(regions)
            except TypeError:
                msg = ("Labels {} cannot be sorted; pass an explicit "
                       "`labels` ordering")
                raise MalformedDomainError(msg.format(list(regions)))
        else:
            labels = list(labels)
            if (len(labels) != len(set(labels)) or
                    set(labels) != set(regions)):
                msg = "`labels` {} does not match the domain's labels {}"
                raise MalformedDomainError(msg.format(labels, list(regions)))

        self.labels = labels
        self.regions = {
            label: self._validate_bounds(label, regions[label])
            for label in labels
        }

        ndims = {bounds.shape[0] for bounds in self.regions.values()}
        if len(ndims) != 1:
            msg = "Labels have differing numbers of dimensions: {}"
            raise MalformedDomainError(msg.format(sorted(ndims)))

        self.ndim = ndims.pop()

        logger.debug("Created domain with labels %s in %d dimension(s)",
                     self.labels, self.ndim)

    def __repr__(self):
        return "<Domain labels={}, ndim={:d}>".format(self.labels, self.ndim)

    def __len__(self):
        return len(self.labels)

    def __getitem__(self, label):
        return self.regions[label]

    @property
    def n_classes(self):
        return len(self.labels)

    def _validate_bounds(self, label, bounds):

        bounds = numpy.array(bounds, dtype=float)

        if bounds.ndim != 2 or bounds.shape[1] != 2 or bounds.shape[0] == 0:
            msg = ("Bounds for label {!r} should be a non-empty list of "
                   "[low, high] pairs; got shape {}")
            raise MalformedDomainError(msg.format(label, bounds.shape))

        if not numpy.isfinite(bounds).all():
            msg = "Bounds for label {!r} contain non-finite values"
            raise MalformedDomainError(msg.format(label))

        bad, = numpy.where(bounds[:, 0] > bounds[:, 1])
        if len(bad) > 0:
            msg = "Bounds for label {!r} have low > high in dimension(s) {}"
            raise MalformedDomainError(msg.format(label, bad.tolist()))

        return bounds

    def class_number(self, label):
        """ The 0-based position of `label` in the domain's label ordering
        """
        return self.labels.index(label)

    def bounding_box(self):
        """ Returns the `[low, high]` pairs enclosing every region
        """
        stacked = numpy.stack([self.regions[label] for label in self.labels])
        return numpy.c_[stacked[:, :, 0].min(axis=0),
                        stacked[:, :, 1].max(axis=0)]


def random_vector(minmax, random_state=None):
    """ Draw a vector uniformly from the box described by `minmax`

    Parameters
    ----------
    minmax: array-like, shape=(n, 2)
        One `[low, high]` pair per component.

    random_state: numpy.random.RandomState, int, or None
        Source of randomness. See :func:`sklearn.utils.check_random_state`.

    Returns
    -------
    vector: ndarray, shape=(n,)
    """
    random_state = check_random_state(random_state)
    minmax = numpy.asarray(minmax, dtype=float)

    return random_state.uniform(low=minmax[:, 0], high=minmax[:, 1])


def normalize_class_index(index, classes):
    """ Rescale a class index into [0, 1]
    """
    if len(classes) <= 1:
        return 0.0
    return index / float(len(classes) - 1)


def denormalize_class_index(value, classes):
    """ Map a value in [0, 1] to the nearest class index

    Ties round up, so with two classes any value >= 0.5 maps to index 1.
    """
    n_classes = len(classes)
    if n_classes <= 1:
        return 0

    index = int(numpy.floor(value * (n_classes - 1) + 0.5))

    return min(max(index, 0), n_classes - 1)


def generate_random_pattern(domain, random_state=None):
    """ Sample a labeled pattern from `domain`

    Parameters
    ----------
    domain: Domain or dict
        The labeled regions to sample from. A dict is converted with
        :class:`Domain` (sorted label order).

    random_state: numpy.random.RandomState, int, or None
        Source of randomness for both the label and the vector.

    Returns
    -------
    pattern: Pattern
    """
    if not isinstance(domain, Domain):
        domain = Domain(domain)

    random_state = check_random_state(random_state)

    class_number = int(random_state.randint(domain.n_classes))
    class_label = domain.labels[class_number]
    vector = random_vector(domain[class_label], random_state=random_state)

    return Pattern(
        vector=vector,
        class_label=class_label,
        class_number=class_number,
        class_norm=normalize_class_index(class_number, domain.labels))
