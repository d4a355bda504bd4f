"""Vertex selection based on the angular distribution of nearby hits.

For each candidate vertex, the hits of each readout view are histogrammed as
a function of their azimuthal angle around the vertex projection, each hit
being weighted by a (decreasing) power of its distance to the vertex. A true
interaction vertex has particles radiating away from it, which concentrates
the hit weight into a few angular bins. The figure of merit is therefore the
sum of the squared bin contents, summed over the three views.

The best candidates are then walked in decreasing order of figure of merit
and vetted against each other, to check that no other comparably good and
spatially distinct candidate exists.

Note that the vetting only gates whether a vertex is output at all: when any
candidate is accepted, the output is the candidate with the highest figure of
merit overall, not the best of the accepted ones. Since the best candidate is
always accepted first, this amounts to outputting the best candidate whenever
at least one candidate is considered.
"""

from dataclasses import MISSING, dataclass, fields

import numpy as np

from larvtx.config.errors import ConfigValidationError
from larvtx.data import ObjectList, Vertex, VertexScore
from larvtx.errors import InvalidParameterError
from larvtx.math.distance import point_cdist
from larvtx.math.histogram import AngularHistogram
from larvtx.utils.enums import VIEWS, HitTypeEnum
from larvtx.utils.logger import logger

from .base import AlgorithmBase

__all__ = [
    "VertexSelectionAlgorithm",
    "figure_of_merit",
    "rank_vertex_scores",
    "accept_vertex_location",
    "accept_vertex_score",
    "select_top_candidates",
]


BOOL_STRINGS = {
    "true": True,
    "yes": True,
    "1": True,
    "false": False,
    "no": False,
    "0": False,
}


def cast_parameter(name, value, dtype):
    """Casts a configuration parameter to its expected type.

    Booleans are accepted as booleans, as 0/1 or as one of the strings in
    :data:`BOOL_STRINGS` (case-insensitive). Integers may not be provided
    as non-integral numbers.

    Parameters
    ----------
    name : str
        Name of the parameter
    value : object
        Value of the parameter
    dtype : type
        Expected type of the parameter (`bool`, `int` or `float`)

    Returns
    -------
    object
        Cast value

    Raises
    ------
    ConfigValidationError
        If the value cannot be represented as the expected type
    """
    error = ConfigValidationError(
        f"`{name}` must be of type {dtype.__name__}, got {value!r}."
    )
    if dtype is bool:
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in BOOL_STRINGS:
            return BOOL_STRINGS[value.strip().lower()]
        if isinstance(value, (int, np.integer)) and value in (0, 1):
            return bool(value)
        raise error

    if dtype is int and isinstance(value, (float, np.floating)):
        if not float(value).is_integer():
            raise error

    try:
        return dtype(value)
    except (TypeError, ValueError, OverflowError) as err:
        raise error from err


@dataclass(frozen=True)
class VertexSelectionConfig:
    """Immutable set of parameters of the vertex selection.

    Attributes
    ----------
    input_cluster_list_name_u : str
        Name of the U-view cluster list
    input_cluster_list_name_v : str
        Name of the V-view cluster list
    input_cluster_list_name_w : str
        Name of the W-view cluster list
    output_vertex_list_name : str
        Name under which to save the selected vertex list
    replace_current_vertex_list : bool, default True
        Whether to make the selected vertex list the current one
    histogram_n_phi_bins : int, default 200
        Number of bins of the angular histograms
    histogram_phi_min : float, default -1.1 pi
        Lower edge of the angular histograms
    histogram_phi_max : float, default 1.1 pi
        Upper edge of the angular histograms
    max_hit_vertex_displacement : float, default inf
        Hits further than this from the vertex projection are ignored
    max_on_hit_displacement : float, default 1.
        A vertex is on a hit if a hit lies strictly closer than this
    hit_deweighting_power : float, default -0.5
        Power of the hit-to-vertex distance used to weight each hit
    min_hit_displacement : float, default 1e-3
        Floor applied to the hit-to-vertex distance when computing weights
    max_top_score_candidates : int, default 5
        Number of best candidates to vet against each other
    min_candidate_displacement : float, default 2.
        Minimum 3D distance between two accepted candidates
    min_candidate_score_fraction : float, default 0.9
        Minimum figure of merit of a candidate, as a fraction of that of any
        accepted candidate
    """

    input_cluster_list_name_u: str
    input_cluster_list_name_v: str
    input_cluster_list_name_w: str
    output_vertex_list_name: str
    replace_current_vertex_list: bool = True
    histogram_n_phi_bins: int = 200
    histogram_phi_min: float = -1.1 * np.pi
    histogram_phi_max: float = 1.1 * np.pi
    max_hit_vertex_displacement: float = np.inf
    max_on_hit_displacement: float = 1.0
    hit_deweighting_power: float = -0.5
    min_hit_displacement: float = 1e-3
    max_top_score_candidates: int = 5
    min_candidate_displacement: float = 2.0
    min_candidate_score_fraction: float = 0.9

    def __post_init__(self):
        """Cast the numerical parameters and check their range."""
        for field in fields(self):
            value = getattr(self, field.name)
            if field.type is str and not isinstance(value, str):
                raise ConfigValidationError(
                    f"`{field.name}` must be a string, got {value!r}."
                )
            if field.type in (int, float, bool):
                object.__setattr__(
                    self, field.name, cast_parameter(field.name, value, field.type)
                )

        if self.histogram_n_phi_bins < 1:
            raise ConfigValidationError("`histogram_n_phi_bins` must be positive.")
        if not self.histogram_phi_max > self.histogram_phi_min:
            raise ConfigValidationError(
                "`histogram_phi_max` must be larger than `histogram_phi_min`."
            )
        if self.min_hit_displacement <= 0.0:
            raise ConfigValidationError("`min_hit_displacement` must be positive.")
        if self.max_top_score_candidates < 0:
            raise ConfigValidationError(
                "`max_top_score_candidates` must not be negative."
            )

    @classmethod
    def from_dict(cls, cfg):
        """Builds the configuration from a flat parameter dictionary.

        Parameters
        ----------
        cfg : dict
            Flat dictionary of (parameter, value) pairs

        Returns
        -------
        VertexSelectionConfig
            Validated configuration
        """
        names = [field.name for field in fields(cls)]
        unknown = [key for key in cfg if key not in names]
        if unknown:
            raise ConfigValidationError(
                f"Unknown vertex selection parameter(s): {unknown}. "
                f"Allowed parameters: {names}."
            )

        required = [field.name for field in fields(cls) if field.default is MISSING]
        missing = [key for key in required if key not in cfg]
        if missing:
            raise ConfigValidationError(
                f"Missing required vertex selection parameter(s): {missing}."
            )

        return cls(**cfg)

    @property
    def cluster_list_names(self):
        """Name of the input cluster list of each view.

        Returns
        -------
        Dict[HitTypeEnum, str]
            Cluster list name, keyed by view
        """
        return {
            HitTypeEnum.U: self.input_cluster_list_name_u,
            HitTypeEnum.V: self.input_cluster_list_name_v,
            HitTypeEnum.W: self.input_cluster_list_name_w,
        }


class VertexSelectionAlgorithm(AlgorithmBase):
    """Selects the best vertex among the current list of vertex candidates.

    Candidates which do not lie on a hit in each of the three views are not
    considered. If any candidate survives, the one with the highest figure
    of merit is saved as a single-vertex list.

    .. code-block:: yaml

        algo:
          vertex_selection:
            input_cluster_list_name_u: clusters_u
            input_cluster_list_name_v: clusters_v
            input_cluster_list_name_w: clusters_w
            output_vertex_list_name: selected_vertices
    """

    # Name of the algorithm (as specified in the configuration)
    name = "vertex_selection"

    # Alternative allowed names of the algorithm
    aliases = ("LArVertexSelection",)

    def __init__(self, **cfg):
        """Initialize the vertex selection parameters.

        Parameters
        ----------
        **cfg : dict
            Selection parameters, see :class:`VertexSelectionConfig`
        """
        self.config = VertexSelectionConfig.from_dict(cfg)

    def run(self, context):
        """Select the best vertex candidate of one event.

        Parameters
        ----------
        context : EventContext
            Named object lists of the event

        Returns
        -------
        ObjectList
            Selected vertex list (empty or with exactly one vertex)
        """
        vertices = context.get_current_vertex_list()

        # Score the candidates which lie on a hit in every view
        vertex_scores = []
        for vertex in vertices:
            score = self.score_vertex(context, vertex)
            if score is not None:
                vertex_scores.append(VertexScore(vertex, score))

        # Pick the best vertex
        selected = self.select(vertex_scores)
        logger.debug(
            "Vertex selection: %d candidate(s), %d on hit in all views, "
            "%d selected.",
            len(vertices),
            len(vertex_scores),
            len(selected),
        )

        # Store the selection
        if len(selected):
            name = self.config.output_vertex_list_name
            context.save_list(name, selected)
            if self.config.replace_current_vertex_list:
                context.replace_current_list(name)

        return selected

    def score_vertex(self, context, vertex):
        """Computes the figure of merit of one vertex candidate.

        Parameters
        ----------
        context : EventContext
            Named object lists of the event
        vertex : Vertex
            Vertex candidate

        Returns
        -------
        float
            Combined figure of merit of the three views, or `None` if the
            vertex does not lie on a hit in every view
        """
        # Scan every view, even once the vertex is known not to be on a hit
        histograms, on_hit = [], True
        for hit_type in VIEWS:
            histogram = AngularHistogram(
                self.config.histogram_n_phi_bins,
                self.config.histogram_phi_min,
                self.config.histogram_phi_max,
            )
            name = self.config.cluster_list_names[hit_type]
            if not self.scan_view(context, vertex, hit_type, name, histogram):
                logger.debug("%s is not on a hit in view %s.", vertex, hit_type.name)
                on_hit = False

            histograms.append(histogram)

        if not on_hit:
            return None

        return figure_of_merit(*histograms)

    def scan_view(self, context, vertex, hit_type, cluster_list_name, histogram):
        """Fills the angular histogram of one view around a vertex.

        Parameters
        ----------
        context : EventContext
            Named object lists of the event
        vertex : Vertex
            Vertex candidate
        hit_type : HitTypeEnum
            View to scan
        cluster_list_name : str
            Name of the cluster list of that view
        histogram : AngularHistogram
            Histogram to fill

        Returns
        -------
        bool
            Whether the vertex lies on any hit of the view
        """
        clusters = context.get_cluster_list(cluster_list_name)
        position = context.project_position(vertex.position, hit_type)

        on_hit = False
        for cluster in clusters:
            if cluster.hit_type != hit_type:
                raise InvalidParameterError(
                    f"Cluster list `{cluster_list_name}` contains a "
                    f"{HitTypeEnum(cluster.hit_type).name} cluster, while it "
                    f"is used as the {HitTypeEnum(hit_type).name} cluster list."
                )

            on_hit |= self.fill_histogram(position, cluster, histogram)

        return on_hit

    def fill_histogram(self, position, cluster, histogram):
        """Fills the angular histogram with the hits of one cluster.

        Parameters
        ----------
        position : np.ndarray
            (2) Projected vertex position in the view of the cluster
        cluster : Cluster
            Cluster of hits
        histogram : AngularHistogram
            Histogram to fill

        Returns
        -------
        bool
            Whether the vertex lies on any hit of the cluster
        """
        # Skip hits which are too far to shape the local angular distribution
        displacements = cluster.points - position
        magnitudes = np.linalg.norm(displacements, axis=1)
        index = np.where(magnitudes <= self.config.max_hit_vertex_displacement)[0]
        displacements, magnitudes = displacements[index], magnitudes[index]

        # Strict inequality: a hit exactly at the threshold is not "on" the vertex
        on_hit = bool(np.any(magnitudes < self.config.max_on_hit_displacement))

        # Fill the histogram with the distance-weighted hit angles
        phis = np.arctan2(displacements[:, 1], displacements[:, 0])
        weights = (
            np.maximum(magnitudes, self.config.min_hit_displacement)
            ** self.config.hit_deweighting_power
        )
        histogram.fill_many(phis, weights)

        return on_hit

    def select(self, vertex_scores):
        """Picks the best vertex out of a list of scored candidates.

        The top candidates are vetted against each other first. If any of
        them is accepted, the output is the candidate with the highest
        figure of merit overall, irrespective of which candidates made it
        through the vetting.

        Parameters
        ----------
        vertex_scores : List[VertexScore]
            Scored vertex candidates

        Returns
        -------
        ObjectList
            Selected vertex list (empty or with exactly one vertex)
        """
        ranked = rank_vertex_scores(vertex_scores)
        accepted = select_top_candidates(
            ranked,
            self.config.max_top_score_candidates,
            self.config.min_candidate_displacement,
            self.config.min_candidate_score_fraction,
        )

        # The vetting only decides whether there is an output at all
        selected = []
        if len(accepted):
            selected.append(ranked[0].vertex)

        return ObjectList(selected, Vertex)


def figure_of_merit(*histograms):
    """Angular concentration of the hit weight around a vertex.

    Parameters
    ----------
    *histograms : AngularHistogram
        One angular histogram per view

    Returns
    -------
    float
        Sum over the histograms of the sum of squared bin contents
    """
    return float(sum(histogram.sum_squares() for histogram in histograms))


def rank_vertex_scores(vertex_scores):
    """Sorts scored candidates by decreasing figure of merit.

    Candidates with identical scores keep their relative input order.

    Parameters
    ----------
    vertex_scores : List[VertexScore]
        Scored vertex candidates

    Returns
    -------
    List[VertexScore]
        Sorted scored vertex candidates
    """
    return sorted(vertex_scores, key=lambda vs: vs.score, reverse=True)


def accept_vertex_location(vertex, accepted, min_candidate_displacement):
    """Checks that a candidate is far enough from all accepted candidates.

    Parameters
    ----------
    vertex : Vertex
        Vertex candidate
    accepted : List[VertexScore]
        Already accepted candidates
    min_candidate_displacement : float
        Minimum 3D distance to any accepted candidate

    Returns
    -------
    bool
        `True` if no accepted candidate is closer than the minimum distance
    """
    if not len(accepted):
        return True

    positions = np.vstack([vs.vertex.position for vs in accepted])
    dists = point_cdist(np.array(vertex.position, dtype=np.float64), positions)

    return not np.any(dists < min_candidate_displacement)


def accept_vertex_score(score, accepted, min_candidate_score_fraction):
    """Checks that a candidate score is comparable to that of all accepted
    candidates.

    Parameters
    ----------
    score : float
        Figure of merit of the candidate
    accepted : List[VertexScore]
        Already accepted candidates
    min_candidate_score_fraction : float
        Minimum score, as a fraction of the score of any accepted candidate

    Returns
    -------
    bool
        `True` if the score is not below the fraction of any accepted score
    """
    for vs in accepted:
        if score < min_candidate_score_fraction * vs.score:
            return False

    return True


def select_top_candidates(
    ranked, max_top_score_candidates, min_candidate_displacement, min_candidate_score_fraction
):
    """Greedily vets the best candidates against each other.

    The first candidate is always accepted. Each subsequent one (up to the
    maximum number of candidates considered) is accepted if it is both far
    enough from, and scored comparably to, every candidate accepted so far.

    Parameters
    ----------
    ranked : List[VertexScore]
        Scored vertex candidates, sorted by decreasing score
    max_top_score_candidates : int
        Number of best candidates to consider
    min_candidate_displacement : float
        Minimum 3D distance between two accepted candidates
    min_candidate_score_fraction : float
        Minimum score ratio of a candidate w.r.t. any accepted candidate

    Returns
    -------
    List[VertexScore]
        Accepted candidates, in decreasing score order
    """
    accepted = []
    for vs in ranked[:max_top_score_candidates]:
        if len(accepted) and not accept_vertex_location(
            vs.vertex, accepted, min_candidate_displacement
        ):
            continue

        if len(accepted) and not accept_vertex_score(
            vs.score, accepted, min_candidate_score_fraction
        ):
            continue

        accepted.append(vs)

    return accepted
