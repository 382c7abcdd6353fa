import pytest
from unittest.mock import patch, MagicMock

from placement_service.utils.exceptions import CellResolverError, RecordNotFoundError
from tests.conftest import assert_envelope_error

PREFIX = '/x3pl'


class TestControllerErrorMapping:
    """Test how service outcomes become envelopes."""

    @patch('placement_service.api.controllers.inventory.get_inventory_service')
    def test_business_error_is_400(self, mock_factory, client):
        mock_factory.return_value.update_record.side_effect = RecordNotFoundError('Record with ID 5 not found')

        response = client.put(f'{PREFIX}/update', json={'id': 5, 'wr_shk': 'A1', 'kolvo': 1})

        assert_envelope_error(response, 400, 'Record with ID 5 not found')

    @patch('placement_service.api.controllers.inventory.get_inventory_service')
    def test_resolver_failure_is_500(self, mock_factory, client):
        mock_factory.return_value.add_record.side_effect = CellResolverError('Cell service returned 502')

        response = client.post(f'{PREFIX}/add', json={})

        assert_envelope_error(response, 500, 'Internal server error')

    @patch('placement_service.api.controllers.inventory.get_inventory_service')
    def test_internal_details_are_hidden(self, mock_factory, client):
        mock_factory.return_value.get_placed.side_effect = RuntimeError('password=secret')

        response = client.get(f'{PREFIX}/razmeshennye')

        assert_envelope_error(response, 500, 'Internal server error')
        assert b'secret' not in response.data

    @patch('placement_service.api.controllers.inventory.get_inventory_service')
    def test_all_passes_configured_limits(self, mock_factory, client, app):
        mock_factory.return_value.get_all_records.return_value = {'items': [], 'pagination': {}}

        client.get(f'{PREFIX}/all?limit=5&offset=10')

        mock_factory.return_value.get_all_records.assert_called_once_with(
            limit=5,
            offset=10,
            default_limit=app.config['DEFAULT_PAGE_LIMIT'],
            max_limit=app.config['MAX_PAGE_LIMIT']
        )

    @patch('placement_service.api.controllers.inventory.get_inventory_service')
    def test_query_string_reaches_search(self, mock_factory, client):
        mock_factory.return_value.search_like.return_value = []

        response = client.get(f'{PREFIX}/search-like?shk=P0&name=bolt')

        assert response.get_json() == {'success': True, 'errorCode': 0, 'value': {'items': []}}
        mock_factory.return_value.search_like.assert_called_once_with({'shk': 'P0', 'name': 'bolt'})
