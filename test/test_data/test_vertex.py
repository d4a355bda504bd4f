"""Tests for the vertex data structures."""

import numpy as np
import pytest

from larvtx.data import ObjectList, Vertex, VertexScore


class TestVertex:
    """Test the vertex data structure."""

    def test_default(self):
        """Test the default vertex attributes."""
        vertex = Vertex()

        assert vertex.id == -1
        assert vertex.position.shape == (3,)
        assert vertex.position.dtype == np.float64

    def test_position(self):
        """Test that the position is copied, cast and locked."""
        position = np.array([1, 2, 3])
        vertex = Vertex(id=4, position=position)

        assert vertex.position.dtype == np.float64
        np.testing.assert_array_equal(vertex.position, [1.0, 2.0, 3.0])

        position[0] = 10
        assert vertex.position[0] == 1.0

        with pytest.raises(ValueError):
            vertex.position[0] = 10.0

    def test_invalid_position(self):
        """Test that a position with the wrong size is rejected."""
        with pytest.raises(AssertionError):
            Vertex(position=[1.0, 2.0])

    def test_equality(self):
        """Test the array-aware equality operator."""
        assert Vertex(id=1, position=[1.0, 2.0, 3.0]) == Vertex(id=1, position=[1, 2, 3])
        assert Vertex(id=1, position=[1.0, 2.0, 3.0]) != Vertex(id=2, position=[1, 2, 3])
        assert Vertex(id=1, position=[1.0, 2.0, 3.0]) != Vertex(id=1, position=[1, 2, 4])

    def test_scalar_dict(self):
        """Test the expansion of the vertex attributes into scalars."""
        vertex = Vertex(id=3, position=[1.0, 2.0, 3.0])

        assert vertex.scalar_dict() == {
            "id": 3,
            "position_x": 1.0,
            "position_y": 2.0,
            "position_z": 3.0,
        }
        assert vertex.scalar_dict(["id"]) == {"id": 3}

    def test_str(self):
        """Test the string representation of a vertex."""
        vertex = Vertex(id=3, position=[1.0, 2.0, 3.0])

        assert str(vertex) == "Vertex(id: 3, position: (1.00, 2.00, 3.00))"

    def test_vertex_score(self):
        """Test that scores are attached to vertices without modifying them."""
        vertex = Vertex(id=3, position=[1.0, 2.0, 3.0])
        vertex_score = VertexScore(vertex, 12.0)

        assert vertex_score.vertex is vertex
        assert vertex_score.score == 12.0
        assert not hasattr(vertex, "score")

    def test_object_list(self):
        """Test that an empty vertex list remembers its content type."""
        vertices = ObjectList([], Vertex)

        assert len(vertices) == 0
        assert vertices.default is Vertex
