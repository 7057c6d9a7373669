from logforward import InfrastructureTemplate, Reconciler, provider_factory



def main():
    # Example usage against a compiled serverless template
    aws_config = {
        "aws_access_key_id": "AKIAEXAMPLE",
        "aws_secret_access_key": "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY",
        "region_name": "us-west-1",
    }
    deployment = {"service": "my-service", "stage": "dev"}
    compiled = {
        "Resources": {
            "FuncLogGroup": {
                "Type": "AWS::Logs::LogGroup",
                "Properties": {"LogGroupName": "/aws/lambda/my-service-dev-func"},
            },
        },
    }

    provider = provider_factory("aws", aws_config, deployment)
    template = InfrastructureTemplate.from_cloudformation(compiled)
    warnings = Reconciler(provider).reconcile(
        template, "arn:aws:lambda:us-west-1:123456789012:function:forwarder"
    )

    print(f"Warnings: {warnings}")
    print(f"Template: {template.to_cloudformation()}")

if __name__ == "__main__":
    main()
