from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from budget.services import build_budget_service


class BudgetServiceMixin:
    def get_service(self):
        return build_budget_service()


class BudgetCurrencyConversion(BudgetServiceMixin, APIView):
    def post(self, request, *args, **kwargs):
        """Return the budget matching name and year, converted to TTD if asked

        Body: { "year": 2021, "projectName": "<name>", "currency": "TTD" }

        Returns:
            {
                "statusCode": 200,
                "success": true,
                "data": [{ "projectId": 1, ..., "finalBudgetTtd": 1234.56 }]
            }
        """
        data = request.data if isinstance(request.data, dict) else {}
        budgets = self.get_service().convert_budget(
            year=data.get("year"),
            project_name=data.get("project_name"),
            currency_code=data.get("currency"),
        )
        return Response(
            {
                "status_code": status.HTTP_200_OK,
                "success": True,
                "data": [budget.model_dump() for budget in budgets],
            }
        )


class BudgetCreate(BudgetServiceMixin, APIView):
    def post(self, request, *args, **kwargs):
        project_id = self.get_service().add_budget(request.data)
        return Response(
            {
                "status_code": status.HTTP_201_CREATED,
                "success": True,
                "message": "Project budget added successfully",
                "project_id": project_id,
            },
            status=status.HTTP_201_CREATED,
        )


class BudgetDetails(BudgetServiceMixin, APIView):
    def get(self, request, project_id, *args, **kwargs):
        budgets = self.get_service().get_by_id(project_id)
        return Response(
            {
                "status_code": status.HTTP_200_OK,
                "success": True,
                "data": [budget.model_dump() for budget in budgets],
            }
        )

    def put(self, request, project_id, *args, **kwargs):
        self.get_service().update_budget(project_id, request.data)
        return Response(
            {
                "status_code": status.HTTP_200_OK,
                "success": True,
                "message": "Project budget updated successfully",
            }
        )

    def delete(self, request, project_id, *args, **kwargs):
        self.get_service().delete_budget(project_id)
        return Response(
            {
                "status_code": status.HTTP_200_OK,
                "success": True,
                "message": "Project budget deleted successfully",
            }
        )
