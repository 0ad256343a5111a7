from aws_cdk import Annotations, CfnOutput, CfnTag, Stack, aws_ec2 as ec2
from constructs import Construct

from network_config import NetworkConfig
from subnet_allocator import TIER_ORDER, SubnetAllocator, SubnetPlan, SubnetTier, plan_subnets

DEFAULT_ROUTE = "0.0.0.0/0"


class NetworkStack(Stack):
    def __init__(self, scope: Construct, construct_id: str,
                 config: NetworkConfig | None = None, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.config = config or NetworkConfig()

        # Fails before anything is declared if the region has too few zones
        self.zones = self.config.select_zones(self.availability_zones)
        plans = plan_subnets(self.zones, SubnetAllocator(self.config.vpc_cidr))

        self.vpc = ec2.CfnVPC(
            self, "Vpc",
            cidr_block=self.config.vpc_cidr,
            enable_dns_support=True,
            enable_dns_hostnames=True
        )

        self.subnets: dict[SubnetTier, list[ec2.CfnSubnet]] = {tier: [] for tier in TIER_ORDER}
        for plan in plans:
            self.subnets[plan.tier].append(self._create_subnet(plan))

        # Keyed by subnet construct id
        self.route_tables: dict[str, ec2.CfnRouteTable] = {}
        for tier in TIER_ORDER:
            for subnet in self.subnets[tier]:
                self.route_tables[subnet.node.id] = self._create_route_table(subnet)

        self.internet_gateway, self.internet_gateway_attachment = self._create_internet_gateway()
        for subnet in self.subnets[SubnetTier.PUBLIC]:
            route = ec2.CfnRoute(
                self, f"{subnet.node.id}DefaultRoute",
                route_table_id=self.route_tables[subnet.node.id].ref,
                destination_cidr_block=DEFAULT_ROUTE,
                gateway_id=self.internet_gateway.ref
            )
            # IGW routes are rejected until the gateway is attached
            route.add_dependency(self.internet_gateway_attachment)

        self.elastic_ips: dict[str, ec2.CfnEIP] = {}
        self.nat_gateways: dict[str, ec2.CfnNatGateway] = {}
        for subnet in self.subnets[SubnetTier.PRIVATE]:
            nat_gateway = self._create_nat_gateway(subnet)
            ec2.CfnRoute(
                self, f"{subnet.node.id}DefaultRoute",
                route_table_id=self.route_tables[subnet.node.id].ref,
                destination_cidr_block=DEFAULT_ROUTE,
                nat_gateway_id=nat_gateway.ref
            )

        # Isolated tier has no default route: no internet egress at all
        for subnet in self.subnets[SubnetTier.ISOLATED]:
            Annotations.of(subnet).add_info(
                f"{subnet.node.id} has no default route and no internet egress"
            )

        if len(self.zones) == 1:
            Annotations.of(self).add_warning_v2(
                "tiered-vpc:single-availability-zone",
                "Subnets are placed in a single availability zone; "
                "set availability_zone_count for zone redundancy"
            )

        CfnOutput(
            self, "VpcId",
            value=self.vpc.ref,
            export_name=f"{self.stack_name}-VpcId"
        )

    def _create_subnet(self, plan: SubnetPlan) -> ec2.CfnSubnet:
        return ec2.CfnSubnet(
            self, plan.construct_id,
            vpc_id=self.vpc.ref,
            cidr_block=plan.cidr_block,
            availability_zone=plan.zone,
            map_public_ip_on_launch=plan.tier.map_public_ip_on_launch,
            tags=[CfnTag(key="Name", value=plan.name)]
        )

    def _create_route_table(self, subnet: ec2.CfnSubnet) -> ec2.CfnRouteTable:
        route_table = ec2.CfnRouteTable(
            self, f"{subnet.node.id}RouteTable",
            vpc_id=self.vpc.ref
        )
        ec2.CfnSubnetRouteTableAssociation(
            self, f"{subnet.node.id}RouteTableAssociation",
            subnet_id=subnet.ref,
            route_table_id=route_table.ref
        )
        return route_table

    def _create_internet_gateway(self) -> tuple[ec2.CfnInternetGateway, ec2.CfnVPCGatewayAttachment]:
        internet_gateway = ec2.CfnInternetGateway(self, "InternetGateway")
        attachment = ec2.CfnVPCGatewayAttachment(
            self, "InternetGatewayAttachment",
            vpc_id=self.vpc.ref,
            internet_gateway_id=internet_gateway.ref
        )
        return internet_gateway, attachment

    def _create_nat_gateway(self, subnet: ec2.CfnSubnet) -> ec2.CfnNatGateway:
        eip = ec2.CfnEIP(self, f"{subnet.node.id}Eip", domain="vpc")
        # EIPs in a VPC need the gateway attached first
        eip.add_dependency(self.internet_gateway_attachment)

        nat_gateway = ec2.CfnNatGateway(
            self, f"{subnet.node.id}NatGateway",
            subnet_id=subnet.ref,
            allocation_id=eip.attr_allocation_id
        )
        self.elastic_ips[subnet.node.id] = eip
        self.nat_gateways[subnet.node.id] = nat_gateway
        return nat_gateway
