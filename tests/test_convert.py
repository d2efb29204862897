from concurrent.futures import ThreadPoolExecutor

import pytest
from rdflib.compare import isomorphic
from rdflib.namespace import RDF, XSD

from conftest import SAMPLE_TCX, activity, lap, tcx_document, trackpoint
from tcx2rdf import MalformedInput, TcxParseError, convert_tcx_to_graph, convert_tcx_to_ttl
from tcx2rdf.convert import activity_title
from tcx2rdf.graph import DC, DEVICE, FIT, PERSON


@pytest.fixture
def graph():
    return convert_tcx_to_graph(SAMPLE_TCX)


def value(g, s, p):
    lit = g.value(s, p)
    return str(lit), lit.datatype


def test_activity_ids_follow_document_order(graph):
    activities = sorted(graph.subjects(FIT.performedBy, PERSON))
    assert activities == [FIT.ac1, FIT.ac2]
    assert (FIT.ac1, RDF.type, FIT.Running) in graph
    assert (FIT.ac2, RDF.type, FIT.Biking) in graph


def test_trackpoint_ids_run_across_activities(graph):
    assert set(graph.objects(FIT.ac1, FIT.hasTrackpoint)) == {FIT.tp1, FIT.tp2, FIT.tp3}
    assert set(graph.objects(FIT.ac2, FIT.hasTrackpoint)) == {FIT.tp4}
    assert graph.value(FIT.tp4, FIT.hasSensorData) == FIT.sd4


def test_every_trackpoint_has_one_sensor_data_timestamp_and_device(graph):
    trackpoints = list(graph.subjects(RDF.type, FIT.Trackpoint))
    assert len(trackpoints) == 4
    for tp in trackpoints:
        assert len(list(graph.objects(tp, FIT.hasSensorData))) == 1
        assert len(list(graph.objects(tp, FIT.timestamp))) == 1
        assert list(graph.objects(tp, FIT.recordedBy)) == [DEVICE]
    assert len(list(graph.subjects(RDF.type, FIT.SensorData))) == 4


def test_activity_metadata(graph):
    assert str(graph.value(FIT.ac1, DC.title)) == "Running activity on 2024-04-14"
    assert value(graph, FIT.ac1, DC.created) == ("2024-04-14T07:36:13.000Z", XSD.dateTime)


def test_activity_aggregates(graph):
    avg, dt = value(graph, FIT.ac1, FIT.averageHeartRate)
    assert dt == XSD.decimal
    assert float(avg) == pytest.approx(156.67, abs=0.01)
    assert value(graph, FIT.ac1, FIT.maxHeartRate) == ("175", XSD.integer)
    assert value(graph, FIT.ac1, FIT.duration) == ("PT30M", XSD.duration)
    assert value(graph, FIT.ac1, FIT.totalDistance) == ("4500", XSD.float)
    power, dt = value(graph, FIT.ac1, FIT.totalPowerOutput)
    assert dt == XSD.float
    # first sample dropped from the sum, kept in the count
    assert float(power) == pytest.approx(350 / 3)


def test_single_trackpoint_activity_has_no_total_power(graph):
    assert graph.value(FIT.ac2, FIT.totalPowerOutput) is None
    assert value(graph, FIT.ac2, FIT.duration) == ("PT45S", XSD.duration)
    assert value(graph, FIT.ac2, FIT.totalDistance) == ("250.5", XSD.float)


def test_sensor_data_values(graph):
    assert value(graph, FIT.sd1, FIT.latitude) == ("51.5", XSD.decimal)
    assert value(graph, FIT.sd1, FIT.longitude) == ("-0.12", XSD.decimal)
    assert value(graph, FIT.sd1, FIT.heartRate) == ("140", XSD.integer)
    assert value(graph, FIT.sd1, FIT.powerOutput) == ("100", XSD.float)
    assert value(graph, FIT.sd4, FIT.powerOutput) == ("180", XSD.float)
    assert value(graph, FIT.tp1, FIT.timestamp) == ("2024-04-14T07:36:13Z", XSD.dateTime)


def test_missing_readings_are_emitted_as_nan():
    doc = tcx_document(activity("Running", [
        lap(0, 100, 150, 160, [
            trackpoint("2024-01-01T00:00:00Z", 1, 1),
            trackpoint("2024-01-01T00:00:01Z", 1, 1),
        ]),
    ]))
    g = convert_tcx_to_graph(doc)
    assert value(g, FIT.sd1, FIT.heartRate) == ("NaN", XSD.integer)
    assert value(g, FIT.sd1, FIT.powerOutput) == ("NaN", XSD.float)
    assert value(g, FIT.ac1, FIT.averageHeartRate) == ("NaN", XSD.decimal)
    assert value(g, FIT.ac1, FIT.totalPowerOutput) == ("NaN", XSD.float)
    assert value(g, FIT.ac1, FIT.duration) == ("PT", XSD.duration)


def test_title_without_id():
    assert activity_title("Running", None) == "Running activity"
    assert activity_title("Biking", "2024-05-01T10:00:00Z") == "Biking activity on 2024-05-01"


def test_activity_without_id_has_no_created():
    doc = tcx_document(activity("Other", [lap(10, 10, 100, 110, [])]))
    g = convert_tcx_to_graph(doc)
    assert str(g.value(FIT.ac1, DC.title)) == "Other activity"
    assert g.value(FIT.ac1, DC.created) is None


def test_empty_document_keeps_person_and_device(empty_tcx):
    g = convert_tcx_to_graph(empty_tcx)
    assert len(g) == 2
    assert g.value(PERSON, RDF.type) is not None


def test_two_runs_are_isomorphic():
    assert isomorphic(convert_tcx_to_graph(SAMPLE_TCX), convert_tcx_to_graph(SAMPLE_TCX))


def test_concurrent_runs_do_not_interfere(empty_tcx):
    docs = [SAMPLE_TCX, empty_tcx] * 4
    with ThreadPoolExecutor(max_workers=4) as pool:
        graphs = list(pool.map(convert_tcx_to_graph, docs))
    for doc, g in zip(docs, graphs):
        if doc is SAMPLE_TCX:
            assert sorted(g.subjects(FIT.performedBy, PERSON)) == [FIT.ac1, FIT.ac2]
            assert len(list(g.subjects(RDF.type, FIT.Trackpoint))) == 4
        else:
            assert len(g) == 2


def test_failures_produce_no_output():
    with pytest.raises(TcxParseError):
        convert_tcx_to_ttl("not xml")
    bad = tcx_document(activity("Running", ["<Lap><Track><Trackpoint><Time>x</Time></Trackpoint></Track></Lap>"]))
    with pytest.raises(MalformedInput):
        convert_tcx_to_ttl(bad)
