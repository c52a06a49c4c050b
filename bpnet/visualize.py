""" Plotting helpers for 2D domains and trained networks
"""
import numpy

from bpnet.data.domain import Pattern
from bpnet.network.propagation import forward_propagate


def _get_axis(ax):
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots()
    return ax


def _check_2d(domain):
    if domain.ndim != 2:
        msg = "Only 2D domains can be plotted; domain has ndim = {}"
        raise ValueError(msg.format(domain.ndim))


def plot_domain(domain, ax=None, **rect_kwargs):
    """ Draw the bounding box of each labeled region of a 2D domain. Extra
    keyword arguments are supplied to :class:`matplotlib.patches.Rectangle`
    """
    from matplotlib.patches import Rectangle

    _check_2d(domain)
    ax = _get_axis(ax)

    kwargs = {'fill': False, 'linewidth': 2}
    kwargs.update(rect_kwargs)

    for class_number, label in enumerate(domain.labels):
        (x0, x1), (y0, y1) = domain[label]
        rect = Rectangle((x0, y0), x1 - x0, y1 - y0,
                         edgecolor='C{:d}'.format(class_number),
                         label=str(label), **kwargs)
        ax.add_patch(rect)

    (x0, x1), (y0, y1) = domain.bounding_box()
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)
    ax.legend()

    return ax


def plot_decision_map(network, domain, ax=None, resolution=50):
    """ Shade the network output over the bounding box of a 2D domain

    Returns
    -------
    ax, outputs: matplotlib axis, ndarray, shape=(resolution, resolution)
        `outputs[i, j]` is the network output at the i'th y coordinate
        and j'th x coordinate.
    """
    _check_2d(domain)
    ax = _get_axis(ax)

    (x0, x1), (y0, y1) = domain.bounding_box()
    xs = numpy.linspace(x0, x1, resolution)
    ys = numpy.linspace(y0, y1, resolution)

    outputs = numpy.zeros((resolution, resolution))
    for i, y in enumerate(ys):
        for j, x in enumerate(xs):
            pattern = Pattern(vector=[x, y], class_label=None,
                              class_number=None, class_norm=None)
            outputs[i, j], _ = forward_propagate(network, pattern, domain)

    image = ax.imshow(outputs, origin='lower', extent=(x0, x1, y0, y1),
                      vmin=0, vmax=1, cmap='coolwarm', aspect='auto')
    ax.figure.colorbar(image, ax=ax)

    return ax, outputs
