import pytest
from datetime import date, timedelta
from django.utils import timezone
from django.urls import reverse
from rest_framework import status


REPORT_NAMES = [
    'reports:unit-costs',
    'reports:category-spending',
    'reports:budget-plan',
    'reports:summary',
    'reports:partners',
    'reports:alerts',
    'reports:trends',
]


@pytest.mark.django_db
class TestReportAccess:
    """Access rules shared by every report endpoint."""

    @pytest.mark.parametrize('name', REPORT_NAMES)
    def test_owner_can_read(self, owner_client, report_project, name):
        response = owner_client.get(reverse(name, args=[report_project.id]))

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.parametrize('name', REPORT_NAMES)
    def test_outsider_gets_not_found(self, outsider_client, report_project, name):
        response = outsider_client.get(reverse(name, args=[report_project.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    @pytest.mark.parametrize('name', REPORT_NAMES)
    def test_unauthenticated(self, api_client, report_project, name):
        response = api_client.get(reverse(name, args=[report_project.id]))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUnitCostReport:
    """Tests for GET /api/reports/projects/{id}/unit-costs/"""

    def test_rows_with_display(self, owner_client, report_project, report_units, make_purchase, settings):
        settings.CURRENCY_CODE = 'EGP'
        make_purchase(report_project, '750.00', unit=report_units['b'])

        url = reverse('reports:unit-costs', args=[report_project.id])
        response = owner_client.get(url)

        assert [row['unit_name'] for row in response.data] == ['A-unit', 'a-unit', 'b-unit']
        row = response.data[2]
        assert row['actual_cost'] == '750.00'
        assert row['cost_percentage'] == '75.00'
        assert row['display']['status'] == 'warning'
        assert row['display']['actual_cost'] == '750.00 EGP'
        assert row['display']['cost_percentage'] == '75.0%'

    def test_empty_project(self, owner_client, empty_project):
        url = reverse('reports:unit-costs', args=[empty_project.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []


@pytest.mark.django_db
class TestCategorySpendingReport:
    """Tests for GET /api/reports/projects/{id}/category-spending/"""

    def test_rows(self, owner_client, report_project, make_purchase):
        make_purchase(report_project, '100.00', category='A')
        make_purchase(report_project, '200.00', category='A')
        make_purchase(report_project, '50.00', category='B')

        url = reverse('reports:category-spending', args=[report_project.id])
        response = owner_client.get(url)

        assert [(row['category'], row['total_spent'], row['purchase_count'], row['average_purchase'])
                for row in response.data] == [
            ('A', '300.00', 2, '150.00'),
            ('B', '50.00', 1, '50.00'),
        ]


@pytest.mark.django_db
class TestBudgetPlanReport:
    """Tests for GET /api/reports/projects/{id}/budget-plan/"""

    def test_rows_follow_project_categories(self, owner_client, report_project):
        url = reverse('reports:budget-plan', args=[report_project.id])
        response = owner_client.get(url)

        assert [row['category'] for row in response.data] == report_project.categories
        kitchen = next(row for row in response.data if row['category'] == 'Kitchen')
        assert kitchen['budget_amount'] == '15000.00'
        assert kitchen['display']['fraction'] == '15.0%'


@pytest.mark.django_db
class TestSummaryReport:
    """Tests for GET /api/reports/projects/{id}/summary/"""

    def test_summary(self, owner_client, report_project, make_purchase):
        make_purchase(report_project, '25000.00')

        url = reverse('reports:summary', args=[report_project.id])
        response = owner_client.get(url)

        assert response.data['total_spent'] == '25000.00'
        assert response.data['spent_percentage'] == '25.00'
        assert response.data['display']['spent_percentage'] == '25.0%'


@pytest.mark.django_db
class TestAlertsReport:
    """Tests for GET /api/reports/projects/{id}/alerts/"""

    def test_budget_alert(self, owner_client, report_project, make_purchase):
        make_purchase(report_project, '95000.00', category='Kitchen')

        url = reverse('reports:alerts', args=[report_project.id])
        response = owner_client.get(url)

        assert response.data[0]['code'] == 'budget_used'
        assert response.data[0]['type'] == 'warning'


@pytest.mark.django_db
class TestTrendsReport:
    """Tests for GET /api/reports/projects/{id}/trends/"""

    def test_rows_with_display(self, owner_client, report_project, make_purchase, settings):
        settings.CURRENCY_CODE = 'EGP'
        make_purchase(report_project, '100.00', on=date(2024, 3, 1))
        make_purchase(report_project, '50.00', on=date(2024, 3, 20))
        make_purchase(report_project, '30.00', on=date(2024, 1, 9))

        url = reverse('reports:trends', args=[report_project.id])
        response = owner_client.get(url)

        assert [(row['month'], row['label'], row['total_spent'], row['purchase_count'])
                for row in response.data] == [
            ('2024-01', 'Jan 2024', '30.00', 1),
            ('2024-03', 'Mar 2024', '150.00', 2),
        ]
        assert response.data[1]['display']['total_spent'] == '150.00 EGP'


@pytest.mark.django_db
class TestMonthsParameter:
    """Tests for the ?months= time range on report endpoints."""

    @pytest.fixture
    def dated_purchases(self, report_project, make_purchase):
        today = timezone.localdate()
        make_purchase(report_project, '1000.00', category='Kitchen', on=today - timedelta(days=10))
        make_purchase(report_project, '4000.00', category='Bathroom', on=today - timedelta(days=400))

    def test_summary_last_months(self, owner_client, report_project, dated_purchases):
        url = reverse('reports:summary', args=[report_project.id])
        response = owner_client.get(url, {'months': 3})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_spent'] == '1000.00'
        assert response.data['purchase_count'] == 1

    def test_summary_all_time_without_months(self, owner_client, report_project, dated_purchases):
        url = reverse('reports:summary', args=[report_project.id])
        response = owner_client.get(url)

        assert response.data['total_spent'] == '5000.00'

    def test_category_spending_last_months(self, owner_client, report_project, dated_purchases):
        url = reverse('reports:category-spending', args=[report_project.id])
        response = owner_client.get(url, {'months': 12})

        assert [row['category'] for row in response.data] == ['Kitchen']

    def test_trends_last_months(self, owner_client, report_project, dated_purchases):
        url = reverse('reports:trends', args=[report_project.id])
        response = owner_client.get(url, {'months': 6})

        assert len(response.data) == 1
        assert response.data[0]['total_spent'] == '1000.00'

    @pytest.mark.parametrize('months', ['0', '121', 'abc'])
    def test_invalid_months(self, owner_client, report_project, months):
        url = reverse('reports:summary', args=[report_project.id])
        response = owner_client.get(url, {'months': months})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'months' in response.data
